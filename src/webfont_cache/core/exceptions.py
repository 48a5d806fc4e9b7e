"""Custom exceptions for the web font cache."""

from typing import Any


class WebfontCacheError(Exception):
    """Base exception for all web font cache errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(WebfontCacheError):
    """Exception raised for configuration errors."""


class ValidationError(WebfontCacheError):
    """Exception raised for input validation errors."""


class NotFoundError(WebfontCacheError):
    """Exception raised when the requested font data does not exist."""


class UpstreamError(WebfontCacheError):
    """Exception raised when an upstream producer fails."""


class CacheIOError(WebfontCacheError):
    """Exception raised for disk cache operation errors."""


# Configuration
class InvalidYamlError(ConfigurationError):
    """Exception raised when a YAML configuration file cannot be parsed."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when a configuration file cannot be loaded."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


# Validation
class InvalidStoreIDError(ValidationError):
    """Exception raised when a store id does not follow ``{id}@{version}__{subsets}``."""

    def __init__(self, store_id: str):
        super().__init__(f"Invalid store id: {store_id!r}")


# Not found
class FontNotFoundError(NotFoundError):
    """Exception raised when a font id is not in the catalog."""

    def __init__(self, font_id: str):
        super().__init__(f"Font not found: {font_id}")


class VariantsNotFoundError(NotFoundError):
    """Exception raised when no variants could be resolved for a bundle."""

    def __init__(self, store_id: str):
        super().__init__(f"No variants found for {store_id}")


class NoMatchingFilesError(NotFoundError):
    """Exception raised when an archive filter matches no file."""

    def __init__(self, store_id: str):
        super().__init__(f"No archive files match the requested variants/formats for {store_id}")


class NoFontFormatError(NotFoundError):
    """Exception raised when a variant has no URL in an acceptable format."""

    def __init__(self, variant_id: str):
        super().__init__(f"No valid font URL found for variant {variant_id}")


# Upstream
class UpstreamFetchError(UpstreamError):
    """Exception raised when fetching remote bytes fails."""

    def __init__(self, url: str, status_code: int | None = None):
        if status_code is None:
            message = f"Failed to fetch {url}"
        else:
            message = f"Failed to fetch {url}, status: {status_code}"
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class EmptyArchiveError(UpstreamError):
    """Exception raised when the archive fetcher produced an archive without files."""

    def __init__(self, store_id: str):
        super().__init__(f"No files received for '{store_id}' font subset archive!")
