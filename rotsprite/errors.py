# rotsprite/errors.py
"""
Error kinds raised by the rotation engine.

All of them are ValueError subclasses so callers that only care about
"bad input" can keep catching ValueError, while callers that care about
the kind can catch the specific class.
"""


class RotSpriteError(ValueError):
    """Base class for every validation failure raised by the engine."""


class EmptyBufferError(RotSpriteError):
    """Pixel buffer is missing or has zero pixels."""


class InvalidDimensionError(RotSpriteError):
    """Width or height is not a positive integer."""


class SizeMismatchError(RotSpriteError):
    """Buffer length does not agree with the declared dimensions."""


class InvalidAngleError(RotSpriteError):
    """Rotation angle is NaN or infinite."""
