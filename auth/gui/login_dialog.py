#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoginDialog - Logowanie administratora (email + hasło)

Po udanym logowaniu result = user_id, w przeciwnym razie None.
"""

import customtkinter as ctk
import threading
from typing import Optional

from auth.session import SessionService


class LoginDialog(ctk.CTkToplevel):
    """Modalny dialog logowania"""

    def __init__(self, parent, session: SessionService):
        super().__init__(parent)

        self.session = session
        self.result: Optional[str] = None

        self.title("Admin Login")
        self.geometry("380x300")
        self.resizable(False, False)

        self.transient(parent)
        self.grab_set()

        self._setup_ui()
        self.after(100, self.email_entry.focus_set)

    def _setup_ui(self):
        frame = ctk.CTkFrame(self)
        frame.pack(fill="both", expand=True, padx=15, pady=15)

        ctk.CTkLabel(
            frame,
            text="🔒 R&T Marketing Admin",
            font=ctk.CTkFont(size=16, weight="bold")
        ).pack(pady=(15, 10))

        self.email_entry = ctk.CTkEntry(frame, width=260, placeholder_text="Email")
        self.email_entry.pack(pady=5)

        self.password_entry = ctk.CTkEntry(frame, width=260, placeholder_text="Password", show="•")
        self.password_entry.pack(pady=5)

        self.error_label = ctk.CTkLabel(frame, text="", text_color="red")
        self.error_label.pack(pady=3)

        self.login_btn = ctk.CTkButton(frame, text="Sign In", width=260, command=self._on_login)
        self.login_btn.pack(pady=5)

        self.password_entry.bind("<Return>", lambda e: self._on_login())
        self.bind("<Escape>", lambda e: self.destroy())

    def _on_login(self):
        email = self.email_entry.get()
        password = self.password_entry.get()

        self.error_label.configure(text="")
        self.login_btn.configure(state="disabled", text="Signing in...")

        def login():
            success, result = self.session.sign_in(email, password)
            self.after(0, lambda: self._on_result(success, result))

        threading.Thread(target=login, daemon=True).start()

    def _on_result(self, success: bool, result: str):
        if not self.winfo_exists():
            return
        if success:
            self.result = result
            self.destroy()
            return

        self.login_btn.configure(state="normal", text="Sign In")
        self.error_label.configure(text=result)
