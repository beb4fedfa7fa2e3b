"""
Mise en forme du formulaire de trajet / Trip form shaping.

Le formulaire mobile envoie des listes par catégorie, parfois de simples
montants, parfois des lignes détaillées, avec des lignes vides par défaut.
Ce module les transforme en enregistrements persistables.
The mobile form sends one list per category, sometimes bare amounts,
sometimes detailed rows, with blank placeholder rows. This module turns
them into persistable records.
"""

from typing import Any

from fleetledger.models.trip_cost_event import CostCategory
from fleetledger.services.cost_calculator import AMOUNT_PLACES, PRICE_PLACES, QUANTITY_PLACES, round_to
from fleetledger.utils.dates import utc_now

# Champ du formulaire -> categorie / Form field -> category
COST_LIST_FIELDS: dict[str, CostCategory] = {
    "fast_tag_costs": CostCategory.FAST_TAG,
    "mcd_costs": CostCategory.MCD,
    "green_tax_costs": CostCategory.GREEN_TAX,
    "rto_costs": CostCategory.RTO,
    "dto_costs": CostCategory.DTO,
    "municipalities_costs": CostCategory.MUNICIPALITIES,
    "border_costs": CostCategory.BORDER,
    "repair_items": CostCategory.REPAIR,
}

_TEXT_FIELDS = ("state", "checkpoint", "part_or_defect", "notes")


def coerce_cost_items(value: Any) -> Any:
    """Convertir les montants nus en lignes / Turn bare amounts into rows.

    ``[120, {"amount": 50, "state": "MH"}]`` -> ``[{"amount": 120}, {"amount": 50, "state": "MH"}]``.
    None passe tel quel (mise a jour partielle) / None passes through (partial update).
    """
    if value is None or not isinstance(value, list):
        return value
    return [{"amount": item} if isinstance(item, (int, float)) and not isinstance(item, bool) else item
            for item in value]


def _text(item: Any, name: str) -> str | None:
    value = getattr(item, name, None)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def is_blank_cost_item(item: Any) -> bool:
    """Ligne vide du formulaire : montant nul et aucun texte / Blank form row: zero amount, no text."""
    # Montant arrondi a l'echelle stockee / Amount rounded to the stored scale
    amount = round_to(getattr(item, "amount", 0) or 0, AMOUNT_PLACES)
    return not amount and not any(_text(item, name) for name in _TEXT_FIELDS)


def cost_event_rows(category: CostCategory, items: list[Any], now: str | None = None) -> list[dict]:
    """Lignes persistables pour une categorie / Persistable rows for one category."""
    now = now or utc_now()
    rows = []
    for item in items:
        if is_blank_cost_item(item):
            continue
        if category == CostCategory.REPAIR and not _text(item, "part_or_defect"):
            raise ValueError("Repair items require part_or_defect")
        rows.append({
            "category": category,
            "state": _text(item, "state"),
            "checkpoint": _text(item, "checkpoint"),
            "part_or_defect": _text(item, "part_or_defect") if category == CostCategory.REPAIR else None,
            "amount": round_to(item.amount, AMOUNT_PLACES),
            "event_time": getattr(item, "event_time", None) or now,
            "notes": _text(item, "notes"),
        })
    return rows


def to_cost_events(form: Any, only_present: bool = False) -> list[dict]:
    """Aplatir les huit listes en lignes etiquetees / Flatten the eight lists into tagged rows.

    only_present : ignorer les listes a None (mise a jour) / skip None lists (update).
    """
    now = utc_now()
    rows = []
    for field_name, category in COST_LIST_FIELDS.items():
        items = getattr(form, field_name, None)
        if items is None:
            if only_present:
                continue
            items = []
        rows.extend(cost_event_rows(category, items, now))
    return rows


def present_categories(form: Any) -> set[CostCategory]:
    """Categories envoyees dans une mise a jour / Categories sent in an update."""
    return {category for field_name, category in COST_LIST_FIELDS.items()
            if getattr(form, field_name, None) is not None}


def to_diesel_purchases(form: Any) -> list[dict]:
    """Lignes d'achat de gasoil, aux echelles des colonnes / Diesel purchase rows, at the column scales."""
    return [
        {
            "state": purchase.state.strip(),
            "city": (purchase.city or "").strip() or None,
            "diesel_quantity": round_to(purchase.diesel_quantity, QUANTITY_PLACES),
            "diesel_price_per_liter": round_to(purchase.diesel_price_per_liter, PRICE_PLACES),
            "purchase_date": purchase.purchase_date,
        }
        for purchase in (getattr(form, "diesel_purchases", None) or [])
    ]
