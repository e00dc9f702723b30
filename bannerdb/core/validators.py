#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for bannerdb operations.

Provides type-safe checks for identifiers, pagination windows and banner
payloads used across the database managers and the CLI.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .exceptions import ValidationError


# Identifiers are stored as signed 64-bit integers
MAX_ID = 2**63 - 1


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            if field not in data or data[field] is None or data[field] == "":
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def validate_id(value: Any, name: str) -> int:
        """
        Validate a required, strictly positive identifier.

        Args:
            value: Candidate identifier
            name: Field name used in the error message

        Returns:
            The identifier as int

        Raises:
            ValidationError: If value is not a positive 64-bit integer
        """
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError(f"{name} must be a positive integer, got {value!r}")
        if value > MAX_ID:
            raise ValidationError(f"{name} exceeds the 64-bit id range, got {value!r}")
        return value

    @staticmethod
    def validate_optional_id(value: Any, name: str) -> int:
        """
        Validate an identifier filter where ``0`` (or None) means "any".

        Returns:
            The identifier, or 0 when the filter is omitted

        Raises:
            ValidationError: If value is negative or not an integer
        """
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValidationError(
                f"{name} must be a non-negative integer, got {value!r}"
            )
        if value > MAX_ID:
            raise ValidationError(f"{name} exceeds the 64-bit id range, got {value!r}")
        return value

    @staticmethod
    def validate_page(limit: Any, offset: Any) -> tuple:
        """
        Validate a limit/offset window.

        A limit of 0 disables pagination; the offset is then ignored.

        Returns:
            (limit, offset) tuple with offset forced to 0 when limit is 0

        Raises:
            ValidationError: If either value is negative or not an integer
        """
        limit = DataValidator.validate_optional_id(limit, "limit")
        offset = DataValidator.validate_optional_id(offset, "offset")
        if limit == 0:
            return 0, 0
        return limit, offset

    @staticmethod
    def normalize_id_list(values: Optional[Iterable[Any]], name: str) -> List[int]:
        """
        Validate a collection of identifiers and drop duplicates.

        Input order is preserved for the first occurrence of each id.

        Raises:
            ValidationError: If any element is not a positive integer
        """
        result: List[int] = []
        seen = set()
        for value in values or []:
            item = DataValidator.validate_id(value, name)
            if item not in seen:
                seen.add(item)
                result.append(item)
        return result

    @staticmethod
    def normalize_bool(value: Any) -> Optional[bool]:
        """
        Convert various inputs to boolean.

        Args:
            value: Value to convert

        Returns:
            Boolean value or None

        Raises:
            ValidationError: If conversion fails
        """
        if isinstance(value, bool):
            return value
        elif isinstance(value, (int, float)):
            if value == 0:
                return False
            elif value == 1:
                return True
            else:
                raise ValidationError(f"Cannot convert numeric '{value}' to boolean")
        elif isinstance(value, str):
            if value.lower() in ("true", "1", "yes", "on"):
                return True
            elif value.lower() in ("false", "0", "no", "off"):
                return False
            else:
                raise ValidationError(f"Cannot convert '{value}' to boolean")
        elif value is not None:
            return bool(value)
        return None
