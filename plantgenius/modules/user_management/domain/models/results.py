# 📄 File: plantgenius/modules/user_management/domain/models/results.py
# 🧭 Purpose (Layman Explanation):
# A standard "it worked / here's what went wrong" envelope so the screens never have to
# deal with crashes from sign-in or profile calls.
# 🧪 Purpose (Technical Summary):
# AuthError ({message, code}) and the AuthResult variant ({data, error}) returned by every
# public authentication entry point instead of raising.
# 🔗 Dependencies:
# pydantic, plantgenius.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# AuthService, AuthContext

from typing import Any, Optional

from pydantic import BaseModel

from plantgenius.shared.core.exceptions import PlantGeniusException


class AuthError(BaseModel):
    """Normalized error: human-readable message plus machine code."""

    message: str
    code: str

    @classmethod
    def from_exception(cls, exc: BaseException, default_code: str) -> "AuthError":
        """
        Normalize any exception.

        Validation and cancellation keep their own codes; everything else
        is reported under the operation's default code.
        """
        if isinstance(exc, PlantGeniusException) and exc.error_code in ("VALIDATION_ERROR", "CANCELLED"):
            return cls(message=exc.message, code=exc.error_code)
        message = getattr(exc, "message", None) or str(exc) or "Unknown error"
        return cls(message=message, code=default_code)


class AuthResult(BaseModel):
    """Either {data, error: None} or {data: None, error}."""

    data: Optional[Any] = None
    error: Optional[AuthError] = None

    @classmethod
    def success(cls, data: Any = None) -> "AuthResult":
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, message: str, code: str) -> "AuthResult":
        return cls(data=None, error=AuthError(message=message, code=code))

    @classmethod
    def from_exception(cls, exc: BaseException, default_code: str) -> "AuthResult":
        return cls(data=None, error=AuthError.from_exception(exc, default_code))

    @property
    def ok(self) -> bool:
        return self.error is None
