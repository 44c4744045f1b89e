"""Per-unit price from a base price plus selected variation modifiers."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from gordopods.core.exceptions import (
    InvalidSelectionCardinality,
    MissingRequiredGroup,
    UnknownVariationOption,
)
from gordopods.domain.entities import VariationGroup


@dataclass(frozen=True, slots=True)
class OptionSelection:
    """Customer's pick: one option of one group."""

    group_id: str
    option_id: str


@dataclass(frozen=True, slots=True)
class SelectedVariation:
    """Snapshot of a selected option, frozen when the item enters the cart."""

    group_id: str
    group_name: str
    option_id: str
    option_name: str
    price_modifier: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "group_id": self.group_id,
            "group_name": self.group_name,
            "option_id": self.option_id,
            "option_name": self.option_name,
            "price_modifier": int(self.price_modifier),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SelectedVariation:
        return cls(
            group_id=str(data.get("group_id", "")),
            group_name=str(data.get("group_name", "")),
            option_id=str(data.get("option_id", "")),
            option_name=str(data.get("option_name", "")),
            price_modifier=int(data.get("price_modifier", 0)),
        )


def unit_price(base_price: int, selections: Iterable[SelectedVariation]) -> int:
    """Base price plus modifiers, clamped at zero."""
    total = int(base_price) + sum(int(selection.price_modifier) for selection in selections)
    return max(0, total)


def validate_selections(
    groups: Sequence[VariationGroup],
    selections: Iterable[OptionSelection | SelectedVariation],
) -> None:
    """Check required groups are covered and single-selection groups hold one option.

    Raises:
        MissingRequiredGroup: required group without a selected option
        InvalidSelectionCardinality: more than one option in a single-selection group
    """
    per_group = Counter(selection.group_id for selection in selections)
    for group in groups:
        count = per_group.get(group.id, 0)
        if group.required and count == 0:
            raise MissingRequiredGroup(group.id)
        if not group.multiple_selection and count > 1:
            raise InvalidSelectionCardinality(group.id, count)


def resolve_selections(
    groups: Sequence[VariationGroup],
    selections: Iterable[OptionSelection],
) -> list[SelectedVariation]:
    """Turn raw (group, option) picks into catalog-backed snapshots.

    Duplicate picks collapse into one; order follows the caller's picks.
    """
    by_id = {group.id: group for group in groups}
    resolved: list[SelectedVariation] = []
    seen: set[tuple[str, str]] = set()
    for selection in selections:
        key = (selection.group_id, selection.option_id)
        if key in seen:
            continue
        group = by_id.get(selection.group_id)
        if group is None:
            raise UnknownVariationOption(selection.group_id)
        option = group.find_option(selection.option_id)
        if option is None:
            raise UnknownVariationOption(selection.group_id, selection.option_id)
        seen.add(key)
        resolved.append(
            SelectedVariation(
                group_id=group.id,
                group_name=group.name,
                option_id=option.id,
                option_name=option.name,
                price_modifier=option.price_modifier,
            )
        )
    return resolved


def selection_key(selections: Iterable[SelectedVariation | OptionSelection]) -> frozenset[tuple[str, str]]:
    """Order-independent identity of a selection set, used to merge cart lines."""
    return frozenset((selection.group_id, selection.option_id) for selection in selections)
