"""Databento REST connector."""

from .provider import DatabentoRESTConnector

__all__ = ["DatabentoRESTConnector"]
