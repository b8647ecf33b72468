# -*- coding: utf-8 -*-
"""
ESG Portal - Summary and export

Builds the dashboard chart series and exports a user's questionnaires:

- xlsx: formatted workbook, one row per financial period
- pdf: summary table of the derived ratios
- csv: every stored field
"""

import io
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from config import APP_CONFIG, METRIC_DEFINITIONS, QUESTIONNAIRE_SECTIONS, format_number, format_percent
from esg_portal.errors import ValidationError

logger = logging.getLogger(__name__)


class ReportFormat(Enum):
    """Export formats"""
    EXCEL = "xlsx"
    PDF = "pdf"
    CSV = "csv"


MIMETYPES = {
    ReportFormat.EXCEL: 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    ReportFormat.PDF: 'application/pdf',
    ReportFormat.CSV: 'text/csv',
}


def _export_columns() -> List[Tuple[str, str]]:
    """(wire name, header) for every exported column, in sheet order"""
    columns = [('financialPeriod', 'Financial Period')]
    for fields in QUESTIONNAIRE_SECTIONS.values():
        columns.extend(fields)
    columns.extend((key, definition['label']) for key, definition in METRIC_DEFINITIONS.items())
    return columns


def _to_native(value) -> Optional[float]:
    """NaN / numpy scalars -> plain float or None"""
    if value is None or pd.isna(value):
        return None
    return float(value)


class ReportGeneratorService:
    """Summary series and document exports over stored questionnaires"""

    # =========================================================================
    # SUMMARY
    # =========================================================================

    def build_summary(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Chart series for the summary page

        Args:
            records: Stored records, financial period ascending

        Returns:
            {labels, datasets: [{key, label, unit, data}], latest, averages}
            Missing ratios are None, never 0.
        """
        frame = self._metrics_frame(records)

        datasets = []
        averages = {}
        for key, definition in METRIC_DEFINITIONS.items():
            series = pd.to_numeric(frame[key], errors='coerce')
            datasets.append({
                'key': key,
                'label': definition['label'],
                'unit': definition['unit'],
                'data': [_to_native(v) for v in series],
            })
            averages[key] = _to_native(series.mean())

        latest = None
        if records:
            last = records[-1]
            latest = {'financialPeriod': last['financialPeriod']}
            latest.update({key: last.get(key) for key in METRIC_DEFINITIONS})

        return {
            'labels': frame['financialPeriod'].tolist(),
            'datasets': datasets,
            'latest': latest,
            'averages': averages,
        }

    # =========================================================================
    # EXPORT
    # =========================================================================

    def export_records(self, records: List[Dict[str, Any]], fmt: str) -> Tuple[bytes, str, str]:
        """
        Export records as a document

        Returns:
            (content, filename, mimetype)

        Raises:
            ValidationError: unsupported format
        """
        try:
            report_format = ReportFormat((fmt or '').lower())
        except ValueError:
            supported = ', '.join(f.value for f in ReportFormat)
            raise ValidationError(f"Format '{fmt}' not supported", {'format': f'expected one of: {supported}'})

        generated_at = datetime.now()
        if report_format == ReportFormat.EXCEL:
            content = self._export_to_excel(records, generated_at)
        elif report_format == ReportFormat.PDF:
            content = self._export_to_pdf(records, generated_at)
        else:
            content = self._export_to_csv(records)

        filename = f"esg_summary_{generated_at.strftime('%Y%m%d_%H%M%S')}.{report_format.value}"
        logger.info(f"Exported {len(records)} records as {report_format.value}")
        return content, filename, MIMETYPES[report_format]

    def _export_to_csv(self, records: List[Dict[str, Any]]) -> bytes:
        columns = _export_columns()
        frame = pd.DataFrame(records, columns=[key for key, _ in columns])
        frame.columns = [header for _, header in columns]
        return frame.to_csv(index=False).encode('utf-8')

    def _export_to_excel(self, records: List[Dict[str, Any]], generated_at: datetime) -> bytes:
        """Formatted workbook"""
        columns = _export_columns()

        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = 'ESG Summary'

        header_font = Font(name='Arial', size=14, bold=True)
        small_font = Font(name='Arial', size=9)
        white_font = Font(name='Arial', size=10, bold=True, color='FFFFFF')
        header_fill = PatternFill(start_color='1e3a5f', end_color='1e3a5f', fill_type='solid')
        border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        last_column = get_column_letter(len(columns))

        # === HEADER ===
        row = 1
        ws.merge_cells(f'A{row}:{last_column}{row}')
        ws[f'A{row}'] = APP_CONFIG['EXPORT_TITLE']
        ws[f'A{row}'].font = header_font
        ws[f'A{row}'].alignment = Alignment(horizontal='center')
        row += 1

        ws.merge_cells(f'A{row}:{last_column}{row}')
        ws[f'A{row}'] = f"Generated: {generated_at.strftime('%d.%m.%Y %H:%M')}"
        ws[f'A{row}'].font = small_font
        ws[f'A{row}'].alignment = Alignment(horizontal='right')
        row += 2

        # === TABLE ===
        for col, (_, header) in enumerate(columns, start=1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = white_font
            cell.fill = header_fill
            cell.border = border
            cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
        ws.row_dimensions[row].height = 45
        row += 1

        for record in records:
            for col, (key, _) in enumerate(columns, start=1):
                value = record.get(key)
                if isinstance(value, bool):
                    value = 'Yes' if value else 'No'
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = border
                if key in METRIC_DEFINITIONS and value is not None:
                    cell.number_format = '0.' + '0' * METRIC_DEFINITIONS[key]['precision']
                elif isinstance(value, float):
                    cell.number_format = '#,##0.00'
            row += 1

        ws.column_dimensions['A'].width = 18
        for col in range(2, len(columns) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 16
        ws.freeze_panes = 'B5'

        output = io.BytesIO()
        wb.save(output)
        return output.getvalue()

    def _export_to_pdf(self, records: List[Dict[str, Any]], generated_at: datetime) -> bytes:
        """Derived ratios per period"""
        output = io.BytesIO()
        doc = SimpleDocTemplate(output, pagesize=landscape(A4))
        styles = getSampleStyleSheet()

        elements = [
            Paragraph(f"<b>{APP_CONFIG['EXPORT_TITLE']}</b>", styles['Title']),
            Paragraph(f"Generated: {generated_at.strftime('%d.%m.%Y %H:%M')}", styles['Normal']),
            Spacer(1, 20),
        ]

        table_data = [['Financial Period'] + [d['label'] for d in METRIC_DEFINITIONS.values()]]
        for record in records:
            line = [record.get('financialPeriod')]
            for key, definition in METRIC_DEFINITIONS.items():
                formatter = format_percent if definition['percent'] else format_number
                line.append(formatter(record.get(key), definition['precision']))
            table_data.append(line)

        table = Table(table_data, colWidths=[120] + [130] * len(METRIC_DEFINITIONS))
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#1e3a5f')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 10),
            ('GRID', (0, 0), (-1, -1), 1, colors.black)
        ]))
        elements.append(table)

        if not records:
            elements.append(Spacer(1, 12))
            elements.append(Paragraph('No responses yet.', styles['Normal']))

        doc.build(elements)
        return output.getvalue()

    @staticmethod
    def _metrics_frame(records: List[Dict[str, Any]]) -> pd.DataFrame:
        return pd.DataFrame(records, columns=['financialPeriod'] + list(METRIC_DEFINITIONS))


# Singleton instance
report_generator_service = ReportGeneratorService()
