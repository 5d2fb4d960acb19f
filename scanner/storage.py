import logging
from pathlib import Path
from core.exceptions import PersistenceException
from scanner.schemas import Report


class ReportWriter:
    """
    Writes reports as JSON files into a directory.

    Each report gets its own file named after its generation instant;
    existing files are never overwritten. Reports sharing an instant get
    a zero-padded ``_NNN`` suffix so names keep sorting in write order.

    Parameters
    ----------
    report_dir : str | Path
        Destination directory, created on first write
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, report_dir: str | Path, logger: logging.Logger):
        self.report_dir = Path(report_dir)
        self.logger = logger

    def write(self, report: Report) -> Path:
        """
        Persist report.

        Parameters
        ----------
        report : Report
            Report to persist

        Returns
        -------
        Path
            Path of the written file

        Raises
        ------
        PersistenceException
            If the directory cannot be created or the file written
        """
        stamp = report.generated_at.strftime("%Y-%m-%dT%H-%M-%S-%fZ")
        payload = report.to_json()

        try:
            self.report_dir.mkdir(parents=True, exist_ok=True)
            path = self._write_new(f"report-{stamp}", payload)
        except OSError as e:
            raise PersistenceException(f"Cannot write report to {self.report_dir}: {e}") from e

        self.logger.info(f"Wrote {path}")
        return path

    def _write_new(self, stem: str, payload: str) -> Path:
        suffix = 0
        while True:
            name = f"{stem}.json" if suffix == 0 else f"{stem}_{suffix:03d}.json"
            path = self.report_dir / name
            try:
                with path.open("x", encoding="utf-8") as fh:
                    fh.write(payload)
                return path
            except FileExistsError:
                suffix += 1
