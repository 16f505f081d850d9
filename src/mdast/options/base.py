#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for parser and stringifier options.

This module defines the foundation shared by ``ParseOptions`` and
``StringifyOptions``: the frozen-dataclass cloning mixin, the ``UNSET``
sentinel for defaults derived from other options, and the conversion of plain
mappings into validated option objects.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Sequence

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdast.exceptions import ValidationError

logger = logging.getLogger(__name__)

UNSET = object()


def _describe(value: Any) -> str:
    """Return a short printable form of an invalid value."""
    text = repr(value)
    return text if len(text) <= 60 else text[:57] + "..."


def validate_bool(value: Any, option: str) -> None:
    """Check that ``value`` is a real boolean.

    Parameters
    ----------
    value : Any
        Value to check
    option : str
        Public option name used in the error message

    Raises
    ------
    ValidationError
        If ``value`` is not ``True`` or ``False``

    """
    if not isinstance(value, bool):
        raise ValidationError(
            f"Invalid value `{_describe(value)}` for setting `options.{option}`, expected a boolean",
            parameter_name=f"options.{option}",
            parameter_value=value,
        )


def validate_choice(value: Any, option: str, choices: Sequence[str]) -> None:
    """Check that ``value`` is one of the enumerated ``choices``."""
    if not isinstance(value, str) or value not in choices:
        expected = ", ".join(f"`{choice}`" for choice in choices)
        raise ValidationError(
            f"Invalid value `{_describe(value)}` for setting `options.{option}`, expected one of {expected}",
            parameter_name=f"options.{option}",
            parameter_value=value,
        )


def validate_min_int(value: Any, option: str, minimum: int) -> None:
    """Check that ``value`` is an integer (not a boolean) of at least ``minimum``."""
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValidationError(
            f"Invalid value `{_describe(value)}` for setting `options.{option}`, "
            f"expected an integer of at least {minimum}",
            parameter_name=f"options.{option}",
            parameter_value=value,
        )


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseOptions(CloneFrozenMixin):
    """Base class for parse and stringify options.

    Every field carries ``metadata`` with a ``help`` text and the public
    camelCase ``option`` name used in mappings and error messages. Subclasses
    validate their fields in ``__post_init__`` and raise ``ValidationError``.

    """

    def __post_init__(self) -> None:
        """Validate every field against the constraints in its metadata.

        Raises
        ------
        ValidationError
            If any field value is of the wrong type or outside its domain.

        """
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            option = f.metadata.get("option", f.name)
            if "choices" in f.metadata:
                validate_choice(value, option, f.metadata["choices"])
            elif "minimum" in f.metadata:
                validate_min_int(value, option, f.metadata["minimum"])
            elif f.metadata.get("type") is bool:
                validate_bool(value, option)

    @classmethod
    def option_names(cls) -> dict[str, str]:
        """Map each public option name to its dataclass field name."""
        return {f.metadata.get("option", f.name): f.name for f in fields(cls)}  # type: ignore[arg-type]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Self:
        """Build validated options from a plain mapping.

        Keys may be the public option names (``ruleRepetition``) or the field
        names (``rule_repetition``). Keys naming no option are ignored, and a
        ``None`` value leaves the option at its default.

        Parameters
        ----------
        mapping : Mapping
            Option values keyed by name

        Returns
        -------
        Self
            Validated options

        Raises
        ------
        ValidationError
            If any value is invalid

        """
        kwargs: dict[str, Any] = {}
        for option, field_name in cls.option_names().items():
            for key in (option, field_name):
                if key in mapping and mapping[key] is not None:
                    kwargs[field_name] = mapping[key]
                    break
        return cls(**kwargs)

    @classmethod
    def from_value(cls, value: Any) -> Self:
        """Normalize ``None``, an options instance, or a mapping into options.

        Parameters
        ----------
        value : None, Self or Mapping
            Caller-supplied configuration

        Returns
        -------
        Self
            Validated options

        Raises
        ------
        ValidationError
            If ``value`` is some other kind of object, or a mapping holding
            invalid values

        """
        if value is None:
            options = cls()
        elif isinstance(value, cls):
            options = value
        elif isinstance(value, Mapping):
            options = cls.from_mapping(value)
        else:
            raise ValidationError(
                f"Invalid value `{_describe(value)}` for `options`, expected a mapping",
                parameter_name="options",
                parameter_value=value,
            )
        logger.debug("Resolved %s: %s", cls.__name__, options)
        return options

    def to_dict(self) -> dict[str, Any]:
        """Return the options keyed by their public names."""
        return {option: getattr(self, field_name) for option, field_name in self.option_names().items()}
