"""
Service d'export CSV/Excel / CSV/Excel export service.
Une ligne par trajet, montants par categorie et gasoil agrege.
One row per trip, with per-category amounts and aggregated diesel.
"""

import csv
import io
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from fleetledger.models.trip_cost_event import CostCategory
from fleetledger.services.cost_calculator import diesel_total, round2

TRIP_EXPORT_FIELDS = [
    "id",
    "trip_date",
    "start_date",
    "end_date",
    "source",
    "destination",
    "truck_number",
    "driver_name",
    "diesel_liters",
    "diesel_cost",
    *(category.trip_column for category in CostCategory),
    "total_cost",
]

# Colonnes monetaires et volumes / Money and volume columns
NUMERIC_FIELDS = {"diesel_liters", "diesel_cost", "total_cost"} | {c.trip_column for c in CostCategory}

MONEY_FORMAT = "#,##0.00"
HEADER_FILL = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")


def _csv_value(field: str, value: Any) -> Any:
    if value is None:
        return ""
    if field in NUMERIC_FIELDS:
        return f"{float(value):.2f}"
    return value


class ExportService:
    """Export des trajets / Trip export."""

    @staticmethod
    def trip_to_row(trip: Any) -> dict[str, Any]:
        """Aplatir un trajet en ligne d'export / Flatten a trip into an export row."""
        purchases = list(trip.diesel_purchases or [])
        row: dict[str, Any] = {
            "id": trip.id,
            "trip_date": trip.trip_date,
            "start_date": trip.start_date,
            "end_date": trip.end_date,
            "source": trip.source,
            "destination": trip.destination,
            "truck_number": trip.truck.truck_number if trip.truck is not None else "",
            "driver_name": trip.driver.name if trip.driver is not None else "",
            "diesel_liters": round2(sum(float(p.diesel_quantity or 0) for p in purchases)),
            "diesel_cost": round2(diesel_total(purchases)),
            "total_cost": float(trip.total_cost or 0),
        }
        for category in CostCategory:
            row[category.trip_column] = float(getattr(trip, category.trip_column, 0) or 0)
        return row

    @staticmethod
    def to_csv(rows: list[dict], fields: list[str]) -> bytes:
        """CSV UTF-8 avec BOM, separateur ';' (Excel) / UTF-8 CSV with BOM, ';' separator (Excel)."""
        output = io.StringIO()
        writer = csv.writer(output, delimiter=";")
        writer.writerow(fields)
        for row in rows:
            writer.writerow([_csv_value(f, row.get(f)) for f in fields])
        return ("\ufeff" + output.getvalue()).encode("utf-8")

    @staticmethod
    def to_xlsx(rows: list[dict], fields: list[str], sheet_name: str = "Trips") -> bytes:
        """Classeur Excel, en-tete fige, montants formates / Excel workbook, frozen header, formatted amounts."""
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name
        ws.append(fields)
        for cell in ws[1]:
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL
        ws.freeze_panes = "A2"

        for row in rows:
            ws.append([row.get(f) for f in fields])

        for col_idx, field in enumerate(fields, 1):
            letter = get_column_letter(col_idx)
            if field in NUMERIC_FIELDS:
                for cell in ws[letter][1:]:
                    cell.number_format = MONEY_FORMAT
            width = max([len(field)] + [len(str(row.get(field) or "")) for row in rows])
            ws.column_dimensions[letter].width = min(width + 2, 40)

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
