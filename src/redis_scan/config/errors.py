from __future__ import annotations

"""Exception types for configuration handling."""


class ConfigurationError(RuntimeError):
    """Raised when configuration values are missing or malformed."""

    @classmethod
    def missing_value(cls, param_name: str, context: str = "") -> "ConfigurationError":
        """Create error for missing value."""
        msg = f"{param_name} is missing or empty"
        if context:
            msg += f": {context}"
        return cls(msg)

    @classmethod
    def invalid_value(cls, param_name: str, value, reason: str = "") -> "ConfigurationError":
        """Create error for invalid value."""
        msg = f"Invalid value for {param_name}: {value!r}"
        if reason:
            msg += f". {reason}"
        return cls(msg)


class ScanConfigurationError(ConfigurationError, ValueError):
    """Raised when scan options are inconsistent, before any round trip is issued."""

    @classmethod
    def unknown_variant(cls, value) -> "ScanConfigurationError":
        return cls(f"Unknown scan variant {value!r}; expected one of scan, hscan, sscan, zscan")

    @classmethod
    def missing_container_key(cls, variant: str) -> "ScanConfigurationError":
        return cls(f"{variant} requires a container key naming the structure to scan")

    @classmethod
    def unexpected_container_key(cls, key: str) -> "ScanConfigurationError":
        return cls(f"Keyspace scans do not take a container key (received {key!r})")

    @classmethod
    def type_filter_not_supported(cls, variant: str) -> "ScanConfigurationError":
        return cls(f"TYPE filter is only supported by keyspace scans, not {variant}")

    @classmethod
    def unknown_option(cls, name: str) -> "ScanConfigurationError":
        return cls(f"Unrecognized scan option {name!r}")


__all__ = ["ConfigurationError", "ScanConfigurationError"]
