"""Store appearance and delivery settings management."""
from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from gordopods.core.exceptions import ValidationException
from gordopods.domain.entities import DeliverySettings, Neighborhood, SocialLink, StoreSettings
from gordopods.integrations.stores import Store

logger = logging.getLogger(__name__)


class SettingsService:
    """Loads and updates settings through the Store; missing settings fall back to defaults."""

    def __init__(self, store: Store, *, key_prefix: str = ""):
        self._store = store
        self._store_key = f"{key_prefix}settings:store"
        self._delivery_key = f"{key_prefix}settings:delivery"

    async def get_store_settings(self) -> StoreSettings:
        payload = await self._store.load(self._store_key)
        if not isinstance(payload, dict):
            return StoreSettings()
        try:
            return StoreSettings.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Stored store settings are invalid, using defaults: %s", exc)
            return StoreSettings()

    async def get_delivery_settings(self) -> DeliverySettings:
        payload = await self._store.load(self._delivery_key)
        if not isinstance(payload, dict):
            return DeliverySettings()
        try:
            return DeliverySettings.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Stored delivery settings are invalid, using defaults: %s", exc)
            return DeliverySettings()

    async def save_store_settings(self, settings: StoreSettings) -> StoreSettings:
        await self._store.save(self._store_key, settings.model_dump())
        logger.info("Store settings updated")
        return settings

    async def save_delivery_settings(self, settings: DeliverySettings) -> DeliverySettings:
        await self._store.save(self._delivery_key, settings.model_dump())
        logger.info("Delivery settings updated")
        return settings

    @staticmethod
    def _merge(model: Any, changes: dict[str, Any]) -> Any:
        unknown = set(changes) - set(type(model).model_fields)
        if unknown:
            raise ValidationException(f"Unknown settings fields: {', '.join(sorted(unknown))}")
        try:
            return type(model).model_validate({**model.model_dump(), **changes})
        except ValidationError as exc:
            raise ValidationException(str(exc)) from exc

    async def update_store_settings(self, **changes: Any) -> StoreSettings:
        current = await self.get_store_settings()
        return await self.save_store_settings(self._merge(current, changes))

    async def update_delivery_settings(self, **changes: Any) -> DeliverySettings:
        current = await self.get_delivery_settings()
        return await self.save_delivery_settings(self._merge(current, changes))

    async def set_whatsapp_number(self, number: str) -> StoreSettings:
        return await self.update_store_settings(whatsapp_number=number.strip())

    # Neighborhoods

    async def add_neighborhood(self, name: str, fee: int) -> Neighborhood:
        settings = await self.get_delivery_settings()
        try:
            neighborhood = Neighborhood(name=name, fee=fee)
        except ValidationError as exc:
            raise ValidationException(str(exc)) from exc
        settings.neighborhood_rates.neighborhoods.append(neighborhood)
        await self.save_delivery_settings(settings)
        return neighborhood

    async def update_neighborhood(self, neighborhood_id: str, **changes: Any) -> Neighborhood:
        settings = await self.get_delivery_settings()
        neighborhoods = settings.neighborhood_rates.neighborhoods
        for index, neighborhood in enumerate(neighborhoods):
            if neighborhood.id != neighborhood_id:
                continue
            updated = self._merge(neighborhood, {**changes, "id": neighborhood_id})
            neighborhoods[index] = updated
            await self.save_delivery_settings(settings)
            return updated
        raise ValidationException(f"Neighborhood {neighborhood_id} not found")

    async def remove_neighborhood(self, neighborhood_id: str) -> bool:
        settings = await self.get_delivery_settings()
        rates = settings.neighborhood_rates
        before = len(rates.neighborhoods)
        rates.neighborhoods = [n for n in rates.neighborhoods if n.id != neighborhood_id]
        if len(rates.neighborhoods) == before:
            return False
        await self.save_delivery_settings(settings)
        return True

    # Social links

    async def add_social_link(self, name: str, url: str) -> SocialLink:
        settings = await self.get_store_settings()
        try:
            link = SocialLink(name=name, url=url)
        except ValidationError as exc:
            raise ValidationException(str(exc)) from exc
        settings.social_links.append(link)
        await self.save_store_settings(settings)
        return link

    async def update_social_link(self, link_id: str, **changes: Any) -> SocialLink:
        settings = await self.get_store_settings()
        for index, link in enumerate(settings.social_links):
            if link.id != link_id:
                continue
            updated = self._merge(link, {**changes, "id": link_id})
            settings.social_links[index] = updated
            await self.save_store_settings(settings)
            return updated
        raise ValidationException(f"Social link {link_id} not found")

    async def delete_social_link(self, link_id: str) -> bool:
        settings = await self.get_store_settings()
        before = len(settings.social_links)
        settings.social_links = [link for link in settings.social_links if link.id != link_id]
        if len(settings.social_links) == before:
            return False
        await self.save_store_settings(settings)
        return True
