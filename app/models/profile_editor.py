"""
Typed edits to the lists inside a financial profile.

Each list kind maps to its item model, so field updates are validated
against that model instead of being written into an untyped dictionary.
Every operation returns a new, re-validated profile; the input profile is
never modified.
"""

import uuid
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel

from .profile import BalanceItem, CashFlowItem, FinancialProfile

ProfileItem = Union[BalanceItem, CashFlowItem]


class ProfileListKind(str, Enum):
    """Editable lists on a profile."""

    ASSETS = "assets"
    LIABILITIES = "liabilities"
    INCOMES = "incomes"
    EXPENSES = "expenses"

    @property
    def item_model(self) -> Type[BaseModel]:
        """Item model stored in this list."""
        if self in (ProfileListKind.ASSETS, ProfileListKind.LIABILITIES):
            return BalanceItem
        return CashFlowItem


def _items(profile: FinancialProfile, kind: ProfileListKind) -> List[ProfileItem]:
    return list(getattr(profile, kind.value))


def _replace_list(
    profile: FinancialProfile, kind: ProfileListKind, items: List[ProfileItem]
) -> FinancialProfile:
    data = profile.model_dump()
    data[kind.value] = [item.model_dump() for item in items]
    return FinancialProfile.model_validate(data)


def new_item(profile: FinancialProfile, kind: ProfileListKind) -> ProfileItem:
    """Create a blank item for a list, starting at the simulation start date."""
    item_id = uuid.uuid4().hex[:9]
    if kind.item_model is BalanceItem:
        return BalanceItem(id=item_id, description="", amount=0)
    return CashFlowItem(
        id=item_id,
        description="",
        monthly_amount=0,
        start_date=profile.personal.simulation_start_date,
    )


def add_item(
    profile: FinancialProfile,
    kind: ProfileListKind,
    item: Optional[ProfileItem] = None,
) -> FinancialProfile:
    """
    Append an item to one of the profile's lists.

    Args:
        profile: Profile to edit
        kind: Which list to append to
        item: Item to append (a blank item when omitted)

    Returns:
        New profile with the item appended

    Raises:
        TypeError: If ``item`` is the wrong model for ``kind``
        ValueError: If an item with the same id already exists
    """
    if item is None:
        item = new_item(profile, kind)
    elif not isinstance(item, kind.item_model):
        raise TypeError(
            f"{kind.value} items must be {kind.item_model.__name__}, "
            f"got {type(item).__name__}"
        )

    items = _items(profile, kind)
    if any(existing.id == item.id for existing in items):
        raise ValueError(f"Duplicate {kind.value} item id: {item.id}")

    items.append(item)
    return _replace_list(profile, kind, items)


def update_item(
    profile: FinancialProfile, kind: ProfileListKind, item_id: str, **changes: Any
) -> FinancialProfile:
    """
    Change fields on one item.

    Args:
        profile: Profile to edit
        kind: Which list holds the item
        item_id: Identifier of the item to change
        **changes: Field values, by snake_case or camelCase name

    Returns:
        New profile with the item updated

    Raises:
        KeyError: If no item has ``item_id``
        pydantic.ValidationError: If a change is unknown or invalid
    """
    model = kind.item_model
    aliases = {
        info.alias: name for name, info in model.model_fields.items() if info.alias
    }
    changes = {aliases.get(key, key): value for key, value in changes.items()}

    items = _items(profile, kind)
    for index, item in enumerate(items):
        if item.id == item_id:
            data: Dict[str, Any] = item.model_dump()
            data.update(changes)
            items[index] = model.model_validate(data)
            return _replace_list(profile, kind, items)
    raise KeyError(f"No {kind.value} item with id {item_id}")


def remove_item(
    profile: FinancialProfile, kind: ProfileListKind, item_id: str
) -> FinancialProfile:
    """Remove an item by id; unknown ids leave the list unchanged."""
    items = [item for item in _items(profile, kind) if item.id != item_id]
    return _replace_list(profile, kind, items)
