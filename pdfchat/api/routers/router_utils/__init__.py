"""
Router utility functions.

Contains helpers shared by router endpoints to keep them clean.
"""

from pdfchat.api.routers.router_utils.error_handling import (
    handle_pdfchat_errors,
    status_code_for,
)

__all__ = [
    "handle_pdfchat_errors",
    "status_code_for",
]
