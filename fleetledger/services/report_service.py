"""
Service de rapport de trajet / Trip report service.
Génère le rapport texte partagé depuis l'application mobile.
Builds the plain-text report shared from the mobile app.
"""

import math
from datetime import datetime
from typing import Any

from fleetledger.models.trip_cost_event import CostCategory
from fleetledger.services.cost_calculator import diesel_total, round2

# Ordre d'affichage des depenses / Expense display order
EXPENSE_ORDER = [
    (CostCategory.FAST_TAG, "Fast Tag Cost", "Fast Tag"),
    (CostCategory.DTO, "DTO Cost", "DTO"),
    (CostCategory.RTO, "RTO Cost", "RTO"),
    (CostCategory.MCD, "MCD Cost", "MCD"),
    (CostCategory.GREEN_TAX, "Green Tax Cost", "Green Tax"),
    (CostCategory.MUNICIPALITIES, "Municipalities Cost", "Municipalities"),
    (CostCategory.BORDER, "Border Cost", "Border Costs"),
    (CostCategory.REPAIR, "Repair Cost", "Repairs"),
]


def _group_indian(integer_part: str) -> str:
    """Groupement indien 12,34,567 / Indian digit grouping."""
    if len(integer_part) <= 3:
        return integer_part
    head, tail = integer_part[:-3], integer_part[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_currency(amount: Any, symbol: str = "₹") -> str:
    """Montant avec symbole et 2 decimales / Amount with symbol and 2 decimals."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        value = 0.0
    if math.isnan(value):
        value = 0.0
    sign = "-" if value < 0 else ""
    integer_part, decimals = f"{abs(round2(value)):.2f}".split(".")
    return f"{sign}{symbol}{_group_indian(integer_part)}.{decimals}"


def _parse_date(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_date(value: str | None) -> str:
    """Date au format ``05 Mar 2024`` / Date formatted as ``05 Mar 2024``."""
    if not value:
        return "N/A"
    try:
        return _parse_date(value).strftime("%d %b %Y")
    except ValueError:
        return "Invalid Date"


def duration_days(start: str | None, end: str | None) -> int:
    """Duree en jours arrondie au-dessus, 0 si inconnue / Duration in days rounded up, 0 if unknown."""
    if not start or not end:
        return 0
    try:
        start_dt, end_dt = _parse_date(start), _parse_date(end)
    except ValueError:
        return 0
    if (start_dt.tzinfo is None) != (end_dt.tzinfo is None):
        start_dt, end_dt = start_dt.replace(tzinfo=None), end_dt.replace(tzinfo=None)
    return math.ceil(abs((end_dt - start_dt).total_seconds()) / 86400)


def _quantity(value: Any) -> str:
    return f"{float(value or 0):g}"


class ReportService:
    """Rapport texte d'un trajet / Trip text report."""

    @staticmethod
    def generate_trip_report(trip: Any, currency: str = "₹") -> str:
        """Générer le rapport / Generate the report.

        ``trip`` expose les colonnes de Trip, ``truck``, ``driver`` et ``diesel_purchases``.
        ``trip`` exposes the Trip columns, ``truck``, ``driver`` and ``diesel_purchases``.
        """
        def money(amount: Any) -> str:
            return format_currency(amount, currency)

        lines = ["TRIP COST REPORT", ""]
        lines.append(f"Trip: {trip.source or 'N/A'} → {trip.destination or 'N/A'}")
        if trip.truck is not None:
            lines.append(f"Truck: {trip.truck.truck_number or 'N/A'} ({trip.truck.model or 'N/A'})")
        lines.append(f"Start Date: {format_date(trip.start_date)}")
        lines.append(f"End Date: {format_date(trip.end_date)}")
        lines.append(f"Duration: {duration_days(trip.start_date, trip.end_date)} days")
        if trip.driver is not None:
            lines.append(f"Driver: {trip.driver.name or 'N/A'}")

        # --- Gasoil / Diesel ---
        lines += ["", "---", "", "🚛 DIESEL PURCHASES", ""]
        purchases = list(trip.diesel_purchases or [])
        if purchases:
            for purchase in purchases:
                quantity = float(purchase.diesel_quantity or 0)
                price = float(purchase.diesel_price_per_liter or 0)
                location = f"{purchase.city}, {purchase.state}" if purchase.city else purchase.state
                lines.append(
                    f"• {location}: {_quantity(quantity)} liters × {money(price)} = {money(quantity * price)}"
                )
            lines += ["", f"Total Diesel Cost: {money(diesel_total(purchases))}"]
        else:
            lines.append("No diesel purchases recorded")

        # --- Autres depenses (non nulles) / Other expenses (non-zero) ---
        lines += ["", "---", "", "💰 OTHER EXPENSES", ""]
        amounts = {category: float(getattr(trip, category.trip_column, 0) or 0) for category, _, _ in EXPENSE_ORDER}
        for category, label, _ in EXPENSE_ORDER:
            if amounts[category] > 0:
                lines += [f"{label}: {money(amounts[category])}", ""]

        # --- Synthese / Summary ---
        diesel = diesel_total(purchases)
        lines += ["---", "", "📊 TRIP SUMMARY", ""]
        lines.append(f"Diesel Purchases: {money(diesel)}")
        for category, _, summary_label in EXPENSE_ORDER:
            lines.append(f"{summary_label}: {money(amounts[category])}")
        lines.append(f"TOTAL TRIP COST: {money(round2(diesel + sum(amounts.values())))}")
        return "\n".join(lines) + "\n"
