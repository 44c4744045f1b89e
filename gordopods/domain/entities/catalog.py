"""Catalog entities: products, their images and variation groups."""
from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, Field

from gordopods.core.exceptions import ValidationException


class VariationOption(BaseModel):
    """Selectable value of a variation group; may raise or lower the price."""

    id: str
    name: str = Field(..., min_length=1)
    price_modifier: int = Field(0, description="Price delta in cents")


class VariationGroup(BaseModel):
    """Named axis of product customization, e.g. "Tamanho"."""

    id: str
    name: str = Field(..., min_length=1)
    required: bool = False
    multiple_selection: bool = False
    options: list[VariationOption] = Field(default_factory=list)

    def find_option(self, option_id: str) -> Optional[VariationOption]:
        return next((option for option in self.options if option.id == option_id), None)


class ProductImage(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    url: str
    is_main: bool = False
    order: int = Field(0, ge=0)


class Category(BaseModel):
    id: str
    name: str = Field(..., min_length=1)
    description: str = ""
    image_url: str = ""
    active: bool = True
    order: int = 0


class Product(BaseModel):
    """Product entity as supplied by the catalog store."""

    id: str
    name: str = Field(..., min_length=1)
    description: str = ""
    price: int = Field(..., ge=0, description="Base price in cents")
    category_id: Optional[str] = None
    images: list[ProductImage] = Field(default_factory=list)
    variation_groups: list[VariationGroup] = Field(default_factory=list)
    stock_control: bool = False
    stock_quantity: int = Field(0, ge=0)
    auto_stock_reduction: bool = False
    active: bool = True

    @property
    def main_image(self) -> Optional[ProductImage]:
        return next((image for image in self.images if image.is_main), None)

    @property
    def sorted_images(self) -> list[ProductImage]:
        return sorted(self.images, key=lambda image: image.order)

    def find_group(self, group_id: str) -> Optional[VariationGroup]:
        return next((group for group in self.variation_groups if group.id == group_id), None)

    def can_supply(self, quantity: int) -> bool:
        """Check stock for ``quantity`` units; products without stock control always can."""
        if not self.stock_control:
            return True
        return quantity <= self.stock_quantity

    def set_main_image(self, image_id: str) -> None:
        """Mark exactly one image as main."""
        if not any(image.id == image_id for image in self.images):
            raise ValidationException(f"Image {image_id} not found in product {self.id}")
        for image in self.images:
            image.is_main = image.id == image_id

    def add_image(self, url: str, image_id: str | None = None) -> ProductImage:
        """Append an image at the end; the first image of a product becomes main."""
        image = ProductImage(
            id=image_id or str(uuid.uuid4()),
            url=url,
            is_main=False,
            order=max((img.order for img in self.images), default=-1) + 1,
        )
        self.images.append(image)
        if self.main_image is None:
            self.set_main_image(image.id)
        return image

    def remove_image(self, image_id: str) -> bool:
        removed = next((image for image in self.images if image.id == image_id), None)
        if removed is None:
            return False
        self.images = self.sorted_images
        self.images.remove(removed)
        for position, image in enumerate(self.images):
            image.order = position
        if removed.is_main and self.images:
            self.set_main_image(self.images[0].id)
        return True
