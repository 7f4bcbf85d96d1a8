import logging
import traceback
from typing import Dict, Any, List

from .graph.errors import RequestFailed


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger once and return it."""
    logger = logging.getLogger("msgraph_snippets")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


class ErrorHandler:
    """Centralized error logging and aggregation for snippet runs."""

    def __init__(self, log_level: str = "INFO"):
        self.logger = configure_logging(log_level)
        self.errors: List[Dict[str, Any]] = []

    def handle_error(self, error: Exception, context: Dict[str, Any]) -> Dict[str, Any]:
        """Log an error with context and keep it for the summary."""
        error_info = {
            "type": type(error).__name__,
            "message": str(error),
            "context": context,
            "traceback": (
                "".join(traceback.format_exception(type(error), error, error.__traceback__))
                if self.logger.level <= logging.DEBUG
                else None
            ),
        }

        self.logger.error(
            f"{error_info['type']}: {error_info['message']} | Context: {context}"
        )

        self.errors.append(error_info)

        return error_info

    def collect_snippet_failure(self, error: Exception, snippet_id: str) -> Dict[str, Any]:
        """Collect a failed snippet run."""
        context: Dict[str, Any] = {"snippet_id": snippet_id}
        if isinstance(error, RequestFailed) and error.status_code is not None:
            context["status_code"] = error.status_code
        return self.handle_error(error, context)

    def get_error_summary(self) -> Dict[str, Any]:
        """Generate summary of all collected errors."""
        if not self.errors:
            return {"total_errors": 0, "error_types": {}, "failed_snippets": []}

        error_types: Dict[str, int] = {}
        failed_snippets = []

        for error in self.errors:
            error_type = error["type"]
            error_types[error_type] = error_types.get(error_type, 0) + 1

            context = error.get("context", {})
            if "snippet_id" in context:
                failed_snippets.append({
                    "snippet": context["snippet_id"],
                    "error": error["message"],
                    "status_code": context.get("status_code"),
                })

        return {
            "total_errors": len(self.errors),
            "error_types": error_types,
            "failed_snippets": failed_snippets
        }

    def clear_errors(self):
        """Clear collected errors."""
        self.errors.clear()

    def format_error_report(self) -> str:
        """Format user-friendly error report."""
        summary = self.get_error_summary()

        if summary["total_errors"] == 0:
            return ""

        lines = [
            f"\n⚠️  Error Summary: {summary['total_errors']} snippets failed",
            ""
        ]

        if summary["error_types"]:
            lines.append("Error Types:")
            for error_type, count in summary["error_types"].items():
                lines.append(f"  • {error_type}: {count}")
            lines.append("")

        if summary["failed_snippets"]:
            lines.append("Failed Snippets:")
            for failure in summary["failed_snippets"][:5]:
                status = f" (HTTP {failure['status_code']})" if failure["status_code"] else ""
                lines.append(f"  • {failure['snippet']}{status}: {failure['error']}")

            if len(summary["failed_snippets"]) > 5:
                lines.append(f"  ... and {len(summary['failed_snippets']) - 5} more")

        return "\n".join(lines)
