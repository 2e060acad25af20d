#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
R&T Catalogue Core Module
=========================
Wspólne komponenty dla wszystkich modułów.
"""

# Supabase client
from core.supabase_client import (
    get_supabase_client,
    set_client,
    reset_client,
    test_connection,
)

# Exceptions
from core.exceptions import (
    CatalogueError,
    DatabaseError,
    RecordNotFoundError,
    ForeignKeyError,
    StorageError,
    FileUploadError,
    FileTooLargeError,
    InvalidFileTypeError,
    ImageDimensionsError,
    ValidationError,
    RequiredFieldError,
    InvalidFieldValueError,
    FormValidationError,
    AuthError,
    NotAuthenticatedError,
    InvalidCredentialsError,
    IntegrationError,
    SupabaseConnectionError,
    RenderError,
)

# Events
from core.events import (
    EventType,
    Event,
    EventBus,
    EventHandler,
    PRODUCT_MUTATION_EVENTS,
    create_event,
    get_event_bus,
    setup_event_logging,
)

# Base classes
from core.base_repository import BaseRepository
from core.base_service import BaseService


__all__ = [
    # Supabase Client
    'get_supabase_client',
    'set_client',
    'reset_client',
    'test_connection',

    # Exceptions
    'CatalogueError',
    'DatabaseError',
    'RecordNotFoundError',
    'ForeignKeyError',
    'StorageError',
    'FileUploadError',
    'FileTooLargeError',
    'InvalidFileTypeError',
    'ImageDimensionsError',
    'ValidationError',
    'RequiredFieldError',
    'InvalidFieldValueError',
    'FormValidationError',
    'AuthError',
    'NotAuthenticatedError',
    'InvalidCredentialsError',
    'IntegrationError',
    'SupabaseConnectionError',
    'RenderError',

    # Events
    'EventType',
    'Event',
    'EventBus',
    'EventHandler',
    'PRODUCT_MUTATION_EVENTS',
    'create_event',
    'get_event_bus',
    'setup_event_logging',

    # Base classes
    'BaseRepository',
    'BaseService',
]
