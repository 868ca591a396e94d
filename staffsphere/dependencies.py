"""Shared FastAPI dependencies: application state, shell, record store."""

from __future__ import annotations

from fastapi import Depends, Request

from staffsphere.common.exceptions import AuthenticationRequired, ShellLoadingException
from staffsphere.notifications.service import ToastQueue
from staffsphere.shell.schemas import Session
from staffsphere.shell.service import SessionShell
from staffsphere.shell.state import AppStore
from staffsphere.store.base import RecordStore


def get_app_store(request: Request) -> AppStore:
    return request.app.state.app_store


def get_shell(request: Request) -> SessionShell:
    return request.app.state.shell


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_toasts(store: AppStore = Depends(get_app_store)) -> ToastQueue:
    return store.toasts


async def require_session(store: AppStore = Depends(get_app_store)) -> Session:
    """Gate page routes: 503 while loading, 401 when signed out."""
    if not store.initialized:
        raise ShellLoadingException()
    if not store.session.is_authenticated:
        raise AuthenticationRequired()
    return store.session
