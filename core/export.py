import datetime
import logging
from typing import BinaryIO, Iterable, List, Union

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from core.models import CableSizingResult, ConductorMaterial, Standard
from core.reporter import summarize
from standards.nec_tables import NEC_250_122
from standards.rules import rules_for

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
HEADER_FONT = Font(bold=True)


def results_to_frame(results: Iterable[CableSizingResult]) -> pd.DataFrame:
    """One row per result, columns as in ``summarize``."""
    rows = [summarize(r) for r in results]
    if not rows:
        return pd.DataFrame(columns=[
            "Standard", "Size", "Base Ampacity (A)", "Derated Ampacity (A)", "Utilization (%)",
            "Derating Factor", "VD (V)", "VD (%)", "Compliant", "Earth Conductor",
            "Alternatives", "Warnings",
        ])
    return pd.DataFrame(rows)


def _style_header(ws, row: int = 1):
    for cell in ws[row]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL


def _write_reference_sheet(wb: Workbook, standard: Standard):
    rules = rules_for(standard)
    table = rules.table(ConductorMaterial.COPPER)
    ws = wb.create_sheet(f"Ref {standard.value}")
    ws.append([f"{table.reference} (Copper)"])
    ws.append(["Size"] + [f"{r.value} C (A)" for r in table.ratings]
              + [f"R ({table.resistance_unit})"])
    _style_header(ws, 2)
    for row in table:
        ws.append([rules.format_size(row.size)] + [row.ampacity[r] for r in table.ratings]
                  + [row.resistance])

    if standard is Standard.NEC:
        ws.append([])
        ws.append(["NEC Table 250.122 - Equipment Grounding Conductors"])
        ws.append(["OCPD (A)", "Cu (AWG/kcmil)", "Al (AWG/kcmil)"])
        _style_header(ws, ws.max_row)
        for ocpd, cu, al in NEC_250_122:
            ws.append([ocpd, cu, al])


def export_to_excel(results: List[CableSizingResult],
                    path: Union[str, BinaryIO]) -> None:
    """Writes a results sheet plus one reference-table sheet per standard used.

    ``path`` may be a filename or a binary file object.
    """
    wb = Workbook()
    ws1 = wb.active
    ws1.title = "Results"

    frame = results_to_frame(results)
    ws1.append(list(frame.columns))
    _style_header(ws1)
    for record in frame.itertuples(index=False):
        ws1.append([None if pd.isna(v) else v for v in record])

    for col in ws1.columns:
        ws1.column_dimensions[col[0].column_letter].width = 18

    ws2 = wb.create_sheet("References")
    ws2.append(["Generated:", datetime.datetime.now().strftime("%Y-%m-%d %H:%M")])
    ws2.append([])
    ws2.append(["#", "Standard", "Citation"])
    _style_header(ws2, 3)
    for i, result in enumerate(results, start=1):
        for citation in result.standard_references:
            ws2.append([i, result.standard.value, citation])

    for standard in Standard:
        if any(r.standard is standard for r in results):
            _write_reference_sheet(wb, standard)

    wb.save(path)
    logger.info("Exported %d results to %s", len(results), path)
