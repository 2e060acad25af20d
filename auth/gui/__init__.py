"""
Auth GUI Module

Komponenty:
- LoginDialog: Dialog logowania administratora
"""

from auth.gui.login_dialog import LoginDialog

__all__ = [
    'LoginDialog',
]
