"""
Exceptions of the publication barcode generator.

Every error is a structured value: a human readable message, the rule that
was violated and a context dict with the offending input.

Hierarchy:
    BarcodeGenError (base)
    ├── InvalidIdentifierLength    digit count is not 7, 8 or 13
    ├── CheckDigitMismatch         supplied EAN-13 check digit is wrong (diagnostic)
    ├── AddonFormatError           add-on is not a 2/5-digit number
    ├── RenderingBackendError      Pillow failed (font, encoder)
    ├── UnsupportedFormatError     unknown output format
    ├── LayoutSettingsError        unusable bar width/height/quality
    ├── PayloadFormatError         encoder payload is not 13 ASCII digits
    ├── IdentifierTypeError        identifier is not a str
    └── ChecksumInputError         malformed input to a check-digit helper

Example:
    >>> try:
    ...     render("svg", "not a code")
    ... except InvalidIdentifierLength as e:
    ...     print(e.length, e.rule)
    0 identifier-length
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__: list[str] = [
    "BarcodeGenError",
    "InvalidIdentifierLength",
    "CheckDigitMismatch",
    "AddonFormatError",
    "RenderingBackendError",
    "UnsupportedFormatError",
    "LayoutSettingsError",
    "ChecksumInputError",
    "PayloadFormatError",
    "IdentifierTypeError",
]


class BarcodeGenError(Exception):
    """
    Base barcode generation/validation error.

    Attributes:
        message: Human readable description.
        rule: Short identifier of the violated rule (e.g. "identifier-length").
        context: Offending input and related values.
    """

    def __init__(
        self,
        message: str,
        *,
        rule: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.rule = rule
        self.context = context or {}

    def __str__(self) -> str:
        parts = [self.__class__.__name__, ": ", self.message]
        if self.rule:
            parts.append(f" [rule={self.rule}]")
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")
        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"rule={self.rule!r}, "
            f"context={self.context!r})"
        )


class InvalidIdentifierLength(BarcodeGenError):
    """
    Normalized identifier has a digit count other than 7, 8 or 13.

    Attributes:
        code: Raw input as supplied by the caller.
        digits: Input after stripping every non-digit.
        length: len(digits).
    """

    def __init__(self, code: str, digits: str) -> None:
        super().__init__(
            f"Identifier must contain 7, 8 or 13 digits, got {len(digits)}",
            rule="identifier-length",
            context={"code": code, "digits": digits},
        )
        self.code = code
        self.digits = digits
        self.length = len(digits)


class CheckDigitMismatch(BarcodeGenError):
    """
    Supplied EAN-13 check digit disagrees with the computed one.

    Recovered locally: the encoder substitutes ``expected`` and keeps going.
    Instances are returned as diagnostics, not raised.
    """

    def __init__(self, code: str, supplied: str, expected: int) -> None:
        super().__init__(
            f"Check digit should be {expected} instead of {supplied}",
            rule="ean13-check-digit",
            context={"code": code, "supplied": supplied, "expected": expected},
        )
        self.code = code
        self.supplied = supplied
        self.expected = expected


class AddonFormatError(BarcodeGenError):
    """Add-on cannot be coerced to a 2- or 5-digit number."""

    def __init__(self, addon: str, reason: str) -> None:
        super().__init__(
            f"Invalid add-on {addon!r}: {reason}",
            rule="addon-format",
            context={"addon": addon},
        )
        self.addon = addon
        self.reason = reason


class RenderingBackendError(BarcodeGenError):
    """
    Failure inside the drawing/image-encoding backend (Pillow).

    The original exception is kept in ``backend_error`` and as ``__cause__``.
    """

    def __init__(self, message: str, backend_error: Optional[BaseException] = None) -> None:
        context: Dict[str, Any] = {}
        if backend_error is not None:
            context["backend_error"] = f"{type(backend_error).__name__}: {backend_error}"
        super().__init__(message, rule="rendering-backend", context=context)
        self.backend_error = backend_error


class UnsupportedFormatError(BarcodeGenError):
    """Requested output format is not one of svg, png, jpeg."""

    def __init__(self, output_format: Any, supported: Optional[list[str]] = None) -> None:
        message = f"Unsupported output format {output_format!r}"
        if supported:
            message += f". Supported: {', '.join(supported)}"
        super().__init__(
            message,
            rule="output-format",
            context={"format": output_format},
        )
        self.output_format = output_format
        self.supported = supported or []


class LayoutSettingsError(BarcodeGenError):
    """Bar width, bar height or JPEG quality outside the usable range."""

    def __init__(self, setting: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Invalid {setting}={value!r}: {reason}",
            rule="layout-settings",
            context={setting: value},
        )
        self.setting = setting
        self.value = value


class ChecksumInputError(BarcodeGenError, ValueError):
    """Check-digit helper called with a wrong-length or non-digit string."""

    def __init__(self, value: str, expected: str) -> None:
        super().__init__(
            f"Expected {expected}, got {value!r}",
            rule="checksum-input",
            context={"value": value},
        )
        self.value = value


class PayloadFormatError(BarcodeGenError, ValueError):
    """Payload handed to the encoder is not exactly 13 ASCII digits."""

    def __init__(self, payload: Any) -> None:
        super().__init__(
            f"Payload must be 13 ASCII digits, got {payload!r}",
            rule="payload-format",
            context={"payload": payload},
        )
        self.payload = payload


class IdentifierTypeError(BarcodeGenError, TypeError):
    """Identifier passed to the pipeline is not a string."""

    def __init__(self, code: Any) -> None:
        super().__init__(
            f"Identifier must be str, got {type(code).__name__}",
            rule="identifier-type",
            context={"code": code},
        )
        self.code = code
