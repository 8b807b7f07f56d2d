"""Result of a plugin settings operation."""
from typing import Optional

from pluginsettings.exceptions import PluginSettingsError
from pluginsettings.models.plugin_settings import PluginSettings

HTTP_OK = 200


class OperationResult:
    """Outcome of a plugin settings operation, shaped for HTTP callers."""

    def __init__(
        self,
        http_code: int = HTTP_OK,
        message: str = "",
        code: Optional[str] = None,
        settings: Optional[PluginSettings] = None,
    ):
        self.http_code = http_code
        self.message = message
        self.code = code
        self.settings = settings

    @classmethod
    def ok(cls, settings: PluginSettings, message: str) -> "OperationResult":
        return cls(HTTP_OK, message, settings=settings)

    @classmethod
    def failed(
        cls, error: PluginSettingsError, settings: Optional[PluginSettings] = None
    ) -> "OperationResult":
        return cls(error.http_code, error.message, code=error.code, settings=settings)

    def is_successful(self) -> bool:
        return self.http_code == HTTP_OK

    def to_dict(self) -> dict:
        data = {"message": self.message}
        if self.code:
            data["code"] = self.code
        if self.settings is not None:
            data["plugin_settings"] = self.settings.to_dict()
        return data

    def __str__(self) -> str:
        if self.code:
            return f"OperationResult[{self.http_code}] {self.code}: {self.message}"
        return f"OperationResult[{self.http_code}] {self.message}"

    __repr__ = __str__
