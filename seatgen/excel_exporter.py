"""
seatgen/excel_exporter.py

Writes a finished Arrangement to .xlsx (openpyxl) or .csv (pandas).
"""
import io
import os
from datetime import date
from typing import Union
from openpyxl.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet
from openpyxl.styles import Font, Border, Side, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from .models import Arrangement, SeatCoordinate
from . import utils

# --- Styling Constants ---
HEADER_FILL = PatternFill(start_color="4F81BD", end_color="4F81BD", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
ROW_FILL = PatternFill(start_color="DCE6F1", end_color="DCE6F1", fill_type="solid")
ROW_FONT = Font(bold=True, size=11)
FRONT_FILL = PatternFill(start_color="D3D3D3", end_color="D3D3D3", fill_type="solid")
DISABLED_FILL = PatternFill(start_color="E0E0E0", end_color="E0E0E0", fill_type="solid")
DISABLED_FONT = Font(color="808080", size=9)
LEADER_FILL = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")
LEADER_FONT = Font(bold=True, size=11)
CENTER_ALIGN = Alignment(horizontal="center", vertical="center", wrap_text=True)
THIN_BORDER_SIDE = Side(style="thin", color="BFBFBF")
THIN_BORDER = Border(left=THIN_BORDER_SIDE, right=THIN_BORDER_SIDE, top=THIN_BORDER_SIDE, bottom=THIN_BORDER_SIDE)

TITLE_ROW = 1
FRONT_ROW = 2
HEADER_ROW = 3
GRID_START_ROW = 4


class ExcelExporter:
    def __init__(self, arrangement: Arrangement):
        self.arrangement = arrangement

    def _fill_seat_sheet(self, ws: Worksheet):
        config = self.arrangement.config
        leaders = set(self.arrangement.leaders)
        last_col = config.columns + 1

        ws.cell(row=TITLE_ROW, column=1, value=f"Seat Table {date.today().isoformat()}").font = Font(size=12, bold=True)

        ws.merge_cells(start_row=FRONT_ROW, start_column=2, end_row=FRONT_ROW, end_column=last_col)
        front = ws.cell(row=FRONT_ROW, column=2, value=utils.FRONT_LABEL)
        front.fill = FRONT_FILL
        front.font = ROW_FONT
        front.alignment = CENTER_ALIGN

        ws.cell(row=HEADER_ROW, column=1).fill = HEADER_FILL
        ws.column_dimensions['A'].width = 10
        for c in range(config.columns):
            cell = ws.cell(row=HEADER_ROW, column=c + 2, value=utils.column_label(c))
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = CENTER_ALIGN
            ws.column_dimensions[get_column_letter(c + 2)].width = 14

        for r in range(config.rows):
            sheet_row = GRID_START_ROW + r
            label = ws.cell(row=sheet_row, column=1, value=utils.row_label(r))
            label.fill = ROW_FILL
            label.font = ROW_FONT
            label.alignment = CENTER_ALIGN
            ws.row_dimensions[sheet_row].height = 30

            for c in range(config.columns):
                seat = SeatCoordinate(r, c)
                cell = ws.cell(row=sheet_row, column=c + 2)
                cell.border = THIN_BORDER
                cell.alignment = CENTER_ALIGN
                name = self.arrangement.occupant(seat)

                if seat in config.disabled_seats:
                    cell.value = utils.EMPTY_SEAT_PLACEHOLDER
                    cell.fill = DISABLED_FILL
                    cell.font = DISABLED_FONT
                elif name is None:
                    cell.value = utils.EMPTY_SEAT_PLACEHOLDER
                elif name in leaders:
                    cell.value = utils.format_leader(name)
                    cell.fill = LEADER_FILL
                    cell.font = LEADER_FONT
                else:
                    cell.value = name

        seed_row = GRID_START_ROW + config.rows + 1
        ws.cell(row=seed_row, column=1, value="Seed").font = ROW_FONT
        ws.cell(row=seed_row, column=2, value=self.arrangement.seed_label)
        ws.cell(row=seed_row + 1, column=1, value="Attempts").font = ROW_FONT
        ws.cell(row=seed_row + 1, column=2, value=self.arrangement.attempts)
        if self.arrangement.lucky:
            ws.cell(row=seed_row + 2, column=1, value="Lucky Person").font = ROW_FONT
            ws.cell(row=seed_row + 2, column=2, value=self.arrangement.lucky)

    def _fill_roster_sheet(self, ws: Worksheet):
        headers = ["Name", "Seat", "Row", "Column", "Group Leader"]
        for c, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=c, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            ws.column_dimensions[get_column_letter(c)].width = 16

        leaders = set(self.arrangement.leaders)
        for r, name in enumerate(self.arrangement.config.roster, start=2):
            seat = self.arrangement.seat_of(name)
            ws.cell(row=r, column=1, value=name)
            if seat is None:
                ws.cell(row=r, column=2, value="Lucky")
            else:
                ws.cell(row=r, column=2, value=seat.label)
                ws.cell(row=r, column=3, value=seat.row + 1)
                ws.cell(row=r, column=4, value=seat.column + 1)
            ws.cell(row=r, column=5, value="Yes" if name in leaders else "")

    def to_workbook(self) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = "Seat Table"
        self._fill_seat_sheet(ws)
        self._fill_roster_sheet(wb.create_sheet(title="Roster"))
        return wb

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.to_workbook().save(buffer)
        return buffer.getvalue()

    def export(self, filepath: Union[str, io.BytesIO]) -> bool:
        """
        Saves to `filepath`; '.csv' paths get a plain grid, everything
        else an .xlsx workbook. Returns False if the file is locked.
        """
        print(f"Exporting seat table to {filepath}...")
        if isinstance(filepath, str):
            directory = os.path.dirname(filepath)
            if directory:
                os.makedirs(directory, exist_ok=True)

        try:
            if isinstance(filepath, str) and filepath.lower().endswith(".csv"):
                df = self.arrangement.to_dataframe()
                df.loc["Seed"] = [self.arrangement.seed_label] + [""] * (len(df.columns) - 1)
                if self.arrangement.lucky:
                    df.loc["Lucky Person"] = [self.arrangement.lucky] + [""] * (len(df.columns) - 1)
                df.to_csv(filepath, encoding="utf-8-sig")
            else:
                self.to_workbook().save(filepath)
        except PermissionError:
            print(f"FATAL ERROR: Could not save to {filepath}. Is the file open in Excel?")
            return False

        print(f"Successfully saved seat table to {filepath}")
        return True
