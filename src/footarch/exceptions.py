"""
Custom exception hierarchy for the footprint Arch Index pipeline.

Provides clear, actionable error messages with context for debugging.
Degenerate footprints (empty or single-row masks) are NOT errors: they
produce a defined all-zero measurement and are never raised.

Version: 1.0.0
"""

from typing import Optional, Dict, Any, Tuple


# ============================================================================
# Base Exception
# ============================================================================

class FootArchError(Exception):
    """
    Base exception for all footprint analysis errors.

    All custom exceptions inherit from this to allow catching all
    pipeline-specific errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Args:
            message: Human-readable error description
            details: Optional dict with additional context (file paths, values, etc.)
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error with details if available"""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} [{details_str}]"
        return self.message


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(FootArchError):
    """Base class for configuration-related errors"""
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when config file doesn't exist"""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found: {config_path}",
            details={"config_path": config_path}
        )


# ============================================================================
# Image Loading Errors
# ============================================================================

class LoadError(FootArchError):
    """Base class for image loading errors. The pipeline never starts."""
    pass


class ImageNotFoundError(LoadError):
    """Raised when the input image file doesn't exist"""

    def __init__(self, file_path: str):
        super().__init__(
            f"Image file not found: {file_path}",
            details={"file_path": file_path}
        )


class UnsupportedImageError(LoadError):
    """Raised when the file cannot be decoded as an image"""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Failed to load image {file_path}: {reason}",
            details={"file_path": file_path, "reason": reason}
        )


class EmptyImageError(LoadError):
    """Raised when the decoded image has zero width or height"""

    def __init__(self, width: int, height: int, source: Optional[str] = None):
        details = {"width": width, "height": height}
        if source is not None:
            details["source"] = source
        super().__init__(
            f"Image has zero dimensions: {width} x {height}",
            details=details
        )


# ============================================================================
# Invariant Violations (programming errors, fail fast)
# ============================================================================

class InvariantViolationError(FootArchError):
    """Base class for broken internal invariants"""
    pass


class PixelBufferShapeError(InvariantViolationError):
    """Raised when a pixel grid doesn't match its declared dimensions"""

    def __init__(self, declared: Tuple[int, int], actual: Tuple[int, ...]):
        super().__init__(
            f"Pixel buffer declared as {declared[0]} x {declared[1]} "
            f"but grid has shape {actual}",
            details={"declared": declared, "actual": actual}
        )


class MaskShapeError(InvariantViolationError):
    """Raised when a mask diverges from the source buffer dimensions"""

    def __init__(self, expected: Tuple[int, int], actual: Tuple[int, ...], stage: str):
        super().__init__(
            f"Mask shape {actual} does not match image shape {expected} after '{stage}'",
            details={"expected": expected, "actual": actual, "stage": stage}
        )


# ============================================================================
# Pipeline Errors
# ============================================================================

class PipelineError(FootArchError):
    """Base class for pipeline execution errors"""
    pass


class PipelineStageError(PipelineError):
    """Raised when a pipeline stage fails unexpectedly"""

    def __init__(self, stage_name: str, original_error: Exception):
        super().__init__(
            f"Pipeline stage '{stage_name}' failed: {str(original_error)}",
            details={
                "stage_name": stage_name,
                "original_error": type(original_error).__name__,
                "error_message": str(original_error)
            }
        )
        self.original_error = original_error


class PipelineStateError(PipelineError):
    """Raised when a stage runs before the outputs it needs exist"""

    def __init__(self, missing_data: list, stage: str):
        super().__init__(
            f"Invalid pipeline state at stage '{stage}': missing {', '.join(missing_data)}",
            details={"stage": stage, "missing_data": missing_data}
        )


# ============================================================================
# Export Errors
# ============================================================================

class ExportError(FootArchError):
    """Base class for export/output errors"""
    pass


class ImageExportError(ExportError):
    """Raised when a visualization buffer cannot be written"""

    def __init__(self, output_path: str, reason: str):
        super().__init__(
            f"Image export failed: {reason}",
            details={"output_path": output_path, "reason": reason}
        )


class ExcelExportError(ExportError):
    """Raised when Excel export fails"""

    def __init__(self, output_path: str, reason: str):
        super().__init__(
            f"Excel export failed: {reason}",
            details={"output_path": output_path, "reason": reason}
        )


class PlotGenerationError(ExportError):
    """Raised when plot generation fails"""

    def __init__(self, plot_type: str, reason: str):
        super().__init__(
            f"Plot generation failed for '{plot_type}': {reason}",
            details={"plot_type": plot_type, "reason": reason}
        )


class OutputDirectoryError(ExportError):
    """Raised when output directory creation/access fails"""

    def __init__(self, directory: str, reason: str):
        super().__init__(
            f"Output directory error: {reason}",
            details={"directory": directory, "reason": reason}
        )


# ============================================================================
# Utility Functions
# ============================================================================

def format_error_chain(error: Exception) -> str:
    """
    Format exception chain for logging.

    Args:
        error: Exception to format

    Returns:
        Multi-line string with full error chain
    """
    lines = [f"Error: {type(error).__name__}: {str(error)}"]

    if isinstance(error, FootArchError) and error.details:
        lines.append("Details:")
        for key, value in error.details.items():
            lines.append(f"  {key}: {value}")

    if error.__cause__ is not None:
        lines.append("\nCaused by:")
        lines.append(format_error_chain(error.__cause__))

    return "\n".join(lines)
