from io import BytesIO

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

ITEM_COLUMNS = ["name", "description", "category", "quantity", "minQuantity", "unit", "price"]

# Accepted header spellings in uploaded workbooks, matched case-insensitively
_IMPORT_ALIASES = {column.lower(): column for column in ITEM_COLUMNS}
_IMPORT_ALIASES["min_quantity"] = "minQuantity"

TEMPLATE_ROWS = [
    {"name": "Laptop 13in", "description": "16GB RAM, 512GB SSD", "category": "electronics",
     "quantity": 10, "minQuantity": 2, "unit": "pcs", "price": 0},
    {"name": "Office Chair", "description": "Ergonomic, adjustable height", "category": "furniture",
     "quantity": 5, "minQuantity": 1, "unit": "pcs", "price": 0},
    {"name": "Stapler", "description": "Desktop stapler, 20-sheet capacity", "category": "office-supplies",
     "quantity": 15, "minQuantity": 3, "unit": "pcs", "price": 0},
]


def _write_workbook(df: pd.DataFrame, sheet_name: str) -> BytesIO:
    """Write a DataFrame to an in-memory xlsx with a bold header and fitted columns."""
    excel_file = BytesIO()
    with pd.ExcelWriter(excel_file, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
        ws = writer.sheets[sheet_name]
        header_fill = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
        for col_idx, column in enumerate(df.columns, start=1):
            cell = ws.cell(row=1, column=col_idx)
            cell.font = Font(bold=True)
            cell.fill = header_fill
            values = [str(column)] + [str(v) for v in df[column].tolist() if v is not None]
            ws.column_dimensions[get_column_letter(col_idx)].width = min(max(len(v) for v in values) + 2, 50)
    excel_file.seek(0)
    return excel_file


def items_workbook(items) -> BytesIO:
    rows = [
        {
            "name": item.name,
            "description": item.description,
            "category": item.category,
            "quantity": item.quantity,
            "minQuantity": item.min_quantity,
            "unit": item.unit,
            "price": float(item.price or 0),
            "status": item.status.value if item.status else None,
        }
        for item in items
    ]
    df = pd.DataFrame(rows, columns=ITEM_COLUMNS + ["status"])
    return _write_workbook(df, "Items")


def inventory_template() -> BytesIO:
    return _write_workbook(pd.DataFrame(TEMPLATE_ROWS, columns=ITEM_COLUMNS), "Inventory Template")


def requests_workbook(requests) -> BytesIO:
    """One row per request line, with the approval stock snapshot."""
    rows = []
    for request in requests:
        for line in request.items or [None]:
            rows.append({
                "No.": len(rows) + 1,
                "Request ID": request.id,
                "Project": request.project_name,
                "Item Name": line.name if line else None,
                "Quantity": line.quantity if line else None,
                "Stock Before": line.stock_before if line else None,
                "Stock After": line.stock_after if line else None,
                "Priority": request.priority.value.capitalize(),
                "Status": request.status.value.capitalize(),
                "Requester": request.requester_name,
                "Email": request.requester_email,
                "Reason": request.reason,
                "Due Date": request.due_date.isoformat() if request.due_date else None,
                "Created": request.created_at.strftime("%Y-%m-%d %H:%M") if request.created_at else None,
                "Updated": request.updated_at.strftime("%Y-%m-%d %H:%M") if request.updated_at else None,
            })
    return _write_workbook(pd.DataFrame(rows), "Requests")


def read_items_workbook(content: bytes) -> list[dict]:
    """Parse the first sheet of an uploaded workbook into item rows.

    Empty cells are dropped so schema defaults apply; unknown columns are ignored.
    """
    df = pd.read_excel(BytesIO(content), engine="openpyxl", dtype=object)
    df.columns = [_IMPORT_ALIASES.get(str(c).strip().lower(), str(c).strip()) for c in df.columns]
    df = df.astype(object).where(pd.notna(df), None)

    rows = []
    for record in df.to_dict("records"):
        row = {key: value for key, value in record.items() if key in ITEM_COLUMNS and value is not None}
        if isinstance(row.get("name"), str):
            row["name"] = row["name"].strip()
        for key in ("quantity", "minQuantity"):
            if isinstance(row.get(key), float) and row[key].is_integer():
                row[key] = int(row[key])
        if row.get("price") is not None:
            row["price"] = str(row["price"])
        rows.append(row)
    return rows
