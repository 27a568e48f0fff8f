"""Callers built on the token codec."""

from .login_service import LoginParams, LoginService, LoginState, check_login

__all__ = ["LoginParams", "LoginService", "LoginState", "check_login"]
