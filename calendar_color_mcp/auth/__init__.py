from .google_auth import SCOPES, GoogleAuthSession, TokenStore

__all__ = ["SCOPES", "GoogleAuthSession", "TokenStore"]
