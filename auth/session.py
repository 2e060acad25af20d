#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SessionService - Logowanie administratora przez Supabase Auth

Odpowiedzialność:
- sign_in / sign_out (email + hasło)
- get_current_user - ponowne sprawdzenie sesji przed operacjami zapisu
- check_session / landing_route - decyzja: panel admina czy katalog publiczny

Zasady:
- Brak własnego przechowywania haseł ani tokenów - sesję trzyma klient Supabase
- Błąd sieci przy sprawdzaniu sesji = brak sesji (widok publiczny)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from supabase import Client

from core.events import EventBus, EventType, create_event
from core.exceptions import InvalidCredentialsError, NotAuthenticatedError

logger = logging.getLogger(__name__)


class LandingRoute(Enum):
    """Widok startowy aplikacji"""
    ADMIN = "admin"
    CATALOGUE = "catalogue"


@dataclass
class SessionStatus:
    """Wynik sprawdzenia sesji"""
    authenticated: bool
    user_id: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "authenticated": self.authenticated,
            "user_id": self.user_id,
            "email": self.email,
        }


class SessionService:
    """
    Serwis sesji administratora.

    Example:
        session = SessionService(get_supabase_client())
        success, message = session.sign_in(email, password)
        user = session.get_current_user()
    """

    def __init__(self, client: Client, event_bus: EventBus = None):
        self.client = client
        self.event_bus = event_bus or EventBus()

    # =========================================================
    # LOGOWANIE
    # =========================================================

    def authenticate(self, email: str, password: str) -> Any:
        """
        Zaloguj przez Supabase Auth.

        Returns:
            Obiekt użytkownika

        Raises:
            InvalidCredentialsError: Złe dane logowania lub błąd Auth
        """
        try:
            response = self.client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            raise InvalidCredentialsError(email, str(e))

        user = getattr(response, "user", None)
        if user is None:
            raise InvalidCredentialsError(email, "no user in response")
        return user

    def sign_in(self, email: str, password: str) -> Tuple[bool, str]:
        """
        Zaloguj administratora.

        Returns:
            Tuple (success, user_id lub komunikat błędu)
        """
        email = (email or "").strip()
        if not email or not password:
            return False, "Email and password are required"

        try:
            user = self.authenticate(email, password)
        except InvalidCredentialsError as e:
            logger.warning(f"[AUTH] ❌ Sign in failed for {email}: {e.details.get('reason')}")
            return False, e.message

        user_id = str(getattr(user, "id", ""))
        logger.info(f"[AUTH] ✅ Signed in: {email}")
        self.event_bus.publish(create_event(
            EventType.USER_LOGGED_IN, {"email": email}, user_id=user_id, source="Auth"
        ))
        return True, user_id

    def sign_out(self) -> bool:
        """Wyloguj (błąd sieci nie blokuje wylogowania lokalnego)"""
        try:
            self.client.auth.sign_out()
        except Exception as e:
            logger.warning(f"[AUTH] ⚠️ Sign out error: {e}")
            return False

        logger.info("[AUTH] ✅ Signed out")
        self.event_bus.publish(create_event(EventType.USER_LOGGED_OUT, {}, source="Auth"))
        return True

    # =========================================================
    # SESJA
    # =========================================================

    def get_current_user(self) -> Optional[Any]:
        """
        Aktualny użytkownik (zapytanie do Supabase Auth, bez cache).

        Returns:
            Obiekt użytkownika lub None
        """
        try:
            response = self.client.auth.get_user()
        except Exception as e:
            logger.debug(f"[AUTH] No active session: {e}")
            return None

        if response is None:
            return None
        return getattr(response, "user", None)

    def require_user(self, action: str = None) -> Any:
        """
        Użytkownik wymagany przed zapisem.

        Raises:
            NotAuthenticatedError: Brak aktywnej sesji
        """
        user = self.get_current_user()
        if user is None:
            raise NotAuthenticatedError(action)
        return user

    def is_authenticated(self) -> bool:
        return self.get_current_user() is not None

    def check_session(self) -> SessionStatus:
        """
        Lekkie sprawdzenie sesji (dla ekranu startowego).
        """
        user = self.get_current_user()
        if user is None:
            return SessionStatus(authenticated=False)

        return SessionStatus(
            authenticated=True,
            user_id=str(getattr(user, "id", "") or ""),
            email=getattr(user, "email", None),
        )

    def landing_route(self) -> LandingRoute:
        """Zalogowany → panel admina, w przeciwnym razie katalog publiczny"""
        if self.check_session().authenticated:
            return LandingRoute.ADMIN
        return LandingRoute.CATALOGUE


def create_session_service(client=None) -> SessionService:
    """
    Factory method do tworzenia SessionService.

    Args:
        client: Opcjonalna instancja Supabase Client
                (jeśli None - użyje get_supabase_client())
    """
    if client is None:
        from core.supabase_client import get_supabase_client
        client = get_supabase_client()

    return SessionService(client)
