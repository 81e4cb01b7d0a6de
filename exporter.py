"""Export of rendered listing tables to CSV or Excel files."""
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional

from tables import RenderedTable, to_csv_text, to_dataframe

BASE_FILENAME = "car_details"
SHEET_NAME = "Car Details"


class ExportFormat(Enum):
    """Supported export formats."""
    CSV = "csv"
    EXCEL = "xlsx"


class ExportError(Exception):
    """Raised when an export file cannot be written."""


class DataExporter:
    """Writes a RenderedTable to ``<output_dir>/car_details.<ext>``.

    Existing files are overwritten without warning.
    """

    def __init__(self, output_dir: Optional[str] = None):
        """Initialize exporter.

        Args:
            output_dir: Directory to save exported files (default: current directory)
        """
        self.output_dir = Path(output_dir) if output_dir else Path(os.getcwd())
        self.logger = logging.getLogger(__name__)

    def path_for(self, fmt: ExportFormat) -> Path:
        return self.output_dir / f"{BASE_FILENAME}.{fmt.value}"

    def export(self, rendered: RenderedTable, fmt: ExportFormat = ExportFormat.CSV) -> str:
        """Export the rendered table in the given format.

        Returns:
            Path to the written file

        Raises:
            ExportError: If the file could not be written
        """
        try:
            if fmt == ExportFormat.CSV:
                return self._export_csv(rendered)
            elif fmt == ExportFormat.EXCEL:
                return self._export_excel(rendered)
        except (OSError, ValueError) as e:
            raise ExportError(f"Could not write {self.path_for(fmt)}: {e}") from e
        raise ExportError(f"Unsupported format: {fmt}")

    def _export_csv(self, rendered: RenderedTable) -> str:
        filepath = self.path_for(ExportFormat.CSV)

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            f.write(to_csv_text(rendered.delimited_rows))

        self.logger.info(f"Exported {len(rendered.structured_rows)} records to {filepath}")
        return str(filepath)

    def _export_excel(self, rendered: RenderedTable) -> str:
        filepath = self.path_for(ExportFormat.EXCEL)
        df = to_dataframe(rendered.structured_rows)
        df.to_excel(filepath, index=False, sheet_name=SHEET_NAME, engine="openpyxl")

        self.logger.info(f"Exported {len(rendered.structured_rows)} records to {filepath}")
        return str(filepath)
