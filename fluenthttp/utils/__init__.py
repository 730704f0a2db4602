"""Utility helpers for fluenthttp."""

from .args_check import check, not_blank, not_null

__all__ = ["check", "not_blank", "not_null"]
