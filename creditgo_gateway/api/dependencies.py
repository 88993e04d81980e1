"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from creditgo_gateway.infrastructure.clients.demo_messages import DemoMessageSource
from creditgo_gateway.infrastructure.clients.message_store import MessageStoreReader


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_message_reader() -> MessageStoreReader:
    """Provide device inbox reader instance"""
    return MessageStoreReader()


def get_demo_source() -> DemoMessageSource:
    """Provide demo inbox instance"""
    return DemoMessageSource()
