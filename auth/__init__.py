#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Auth Module - Sesja administratora (Supabase Auth)

Użycie:
    from auth import create_session_service

    session = create_session_service()
    ok, message = session.sign_in("admin@example.com", "secret")

    if session.landing_route() == LandingRoute.ADMIN:
        ...
"""

from auth.session import (
    SessionService,
    SessionStatus,
    LandingRoute,
    create_session_service,
)

__all__ = [
    'SessionService',
    'SessionStatus',
    'LandingRoute',
    'create_session_service',
]
