"""
R&T Catalogue - Własne wyjątki
==============================
Hierarchia wyjątków dla całego systemu.

Warstwy:
- repozytoria rzucają DatabaseError / StorageError
- walidatory rzucają ValidationError (z nazwą pola - błąd pokazywany przy polu)
- sesja rzuca AuthError (brak sesji, złe dane logowania)
- serwisy łapią i zamieniają na Tuple[bool, str] dla GUI
"""


class CatalogueError(Exception):
    """Bazowy wyjątek dla wszystkich błędów aplikacji"""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializuj do logów / komunikatów"""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


# ============================================================
# Database Errors
# ============================================================

class DatabaseError(CatalogueError):
    """Błędy związane z bazą danych"""
    pass


class RecordNotFoundError(DatabaseError):
    """Rekord nie został znaleziony"""

    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(
            f"{entity_type} with id '{entity_id}' not found",
            code="RECORD_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": entity_id}
        )


class ForeignKeyError(DatabaseError):
    """Rekord jest nadal referencjonowany - usunięcie zablokowane"""

    def __init__(self, entity_type: str, referenced_type: str, referenced_id: str,
                 count: int = 0):
        super().__init__(
            f"Cannot delete {entity_type.lower()} with {count} {referenced_type.lower()}(s). "
            f"Remove {referenced_type.lower()}s first.",
            code="FOREIGN_KEY_ERROR",
            details={
                "entity_type": entity_type,
                "referenced_type": referenced_type,
                "referenced_id": referenced_id,
                "count": count,
            }
        )
        self.count = count


# ============================================================
# Storage Errors
# ============================================================

class StorageError(CatalogueError):
    """Błędy związane z Supabase Storage"""
    pass


class FileUploadError(StorageError):
    """Błąd podczas uploadu pliku"""

    def __init__(self, path: str, reason: str = None):
        super().__init__(
            f"Failed to upload file: {path}" + (f" - {reason}" if reason else ""),
            code="FILE_UPLOAD_ERROR",
            details={"path": path, "reason": reason}
        )


class FileTooLargeError(StorageError):
    """Plik jest za duży"""

    def __init__(self, filename: str, size_mb: float, max_size_mb: float):
        super().__init__(
            f"File '{filename}' is too large ({size_mb:.1f} MB). Maximum: {max_size_mb:.0f} MB",
            code="FILE_TOO_LARGE",
            details={
                "filename": filename,
                "size_mb": size_mb,
                "max_size_mb": max_size_mb
            }
        )


class InvalidFileTypeError(StorageError):
    """Nieprawidłowy typ pliku"""

    def __init__(self, filename: str, allowed_types: list):
        super().__init__(
            f"Invalid file type: '{filename}'. Allowed: {', '.join(allowed_types)}",
            code="INVALID_FILE_TYPE",
            details={"filename": filename, "allowed_types": allowed_types}
        )


class ImageDimensionsError(StorageError):
    """Obraz ma za małą rozdzielczość"""

    def __init__(self, width: int, height: int, min_size: int):
        super().__init__(
            f"Image must be at least {min_size}x{min_size} pixels (got {width}x{height})",
            code="IMAGE_TOO_SMALL",
            details={"width": width, "height": height, "min_size": min_size}
        )


# ============================================================
# Validation Errors
# ============================================================

class ValidationError(CatalogueError):
    """Błędy walidacji danych"""

    def __init__(self, message: str, code: str = None, details: dict = None,
                 field: str = None):
        super().__init__(message, code=code, details=details)
        self.field = field


class RequiredFieldError(ValidationError):
    """Brak wymaganego pola"""

    def __init__(self, field: str, entity_type: str = None, message: str = None):
        msg = message or f"Field '{field}' is required"
        if entity_type and not message:
            msg = f"{entity_type}: {msg}"
        super().__init__(msg, code="REQUIRED_FIELD", details={"field": field},
                         field=field)


class InvalidFieldValueError(ValidationError):
    """Nieprawidłowa wartość pola"""

    def __init__(self, field: str, value, reason: str = None):
        msg = reason or f"Invalid value for field '{field}': {value}"
        super().__init__(
            msg,
            code="INVALID_FIELD_VALUE",
            details={"field": field, "value": str(value), "reason": reason},
            field=field
        )


class FormValidationError(ValidationError):
    """
    Zbiorczy błąd walidacji formularza.

    errors: {nazwa_pola: komunikat} - GUI pokazuje każdy przy swoim polu
    """

    def __init__(self, errors: dict):
        self.errors = dict(errors)
        summary = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(
            f"Validation failed: {summary}",
            code="FORM_VALIDATION_ERROR",
            details={"errors": self.errors}
        )


# ============================================================
# Auth Errors
# ============================================================

class AuthError(CatalogueError):
    """Błędy autoryzacji"""
    pass


class NotAuthenticatedError(AuthError):
    """Użytkownik nie jest zalogowany (operacja zapisu bez sesji)"""

    def __init__(self, action: str = None):
        super().__init__(
            "You must be logged in" + (f" to {action}" if action else ""),
            code="NOT_AUTHENTICATED",
            details={"action": action}
        )


class InvalidCredentialsError(AuthError):
    """Nieprawidłowy email lub hasło"""

    def __init__(self, email: str, reason: str = None):
        super().__init__(
            "Invalid email or password",
            code="INVALID_CREDENTIALS",
            details={"email": email, "reason": reason}
        )


# ============================================================
# Integration Errors
# ============================================================

class IntegrationError(CatalogueError):
    """Błędy integracji z zewnętrznymi systemami"""
    pass


class SupabaseConnectionError(IntegrationError):
    """Błąd połączenia z Supabase"""

    def __init__(self, reason: str = None):
        super().__init__(
            "Failed to connect to Supabase" + (f": {reason}" if reason else ""),
            code="SUPABASE_CONNECTION_ERROR",
            details={"reason": reason}
        )


# ============================================================
# Render Errors
# ============================================================

class RenderError(CatalogueError):
    """Błąd generowania katalogu PDF (cały dokument)"""

    def __init__(self, reason: str):
        super().__init__(
            f"Failed to generate catalogue: {reason}",
            code="RENDER_ERROR",
            details={"reason": reason}
        )
