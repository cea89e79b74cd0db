"""Exception classes for the cellcoloc core module."""


class ColocalizationError(Exception):
    """Base exception for all analysis errors."""


class ChannelNotFoundError(ColocalizationError):
    """Raised when a channel index does not exist in the source image."""

    def __init__(self, channel: int | None = None, channel_count: int | None = None) -> None:
        if channel is not None and channel_count is not None:
            msg = (
                f"Channel not found: {channel} "
                f"(image has {channel_count} channel{'s' if channel_count != 1 else ''})"
            )
        elif channel is not None:
            msg = f"Channel not found: {channel}"
        else:
            msg = "Channel not found"
        super().__init__(msg)
        self.channel = channel
        self.channel_count = channel_count


class InvalidConfigurationError(ColocalizationError):
    """Raised when analysis parameters are unknown or out of range."""

    def __init__(self, detail: str | None = None) -> None:
        msg = f"Invalid configuration: {detail}" if detail else "Invalid configuration"
        super().__init__(msg)
        self.detail = detail
