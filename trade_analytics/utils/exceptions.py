class TradeAnalyticsError(Exception):
    pass


class ConfigError(TradeAnalyticsError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"Configuration error: {self.message}"


class TradeSourceError(TradeAnalyticsError):
    def __init__(self, message: str, source: str, path: str = "") -> None:
        self.message = message
        self.source = source
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        path_info = f" at {self.path}" if self.path else ""
        return f"Failed to read trades from {self.source}{path_info}: {self.message}"


class InvalidTradeRecordError(TradeAnalyticsError):
    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid trade record #{index}: {reason}")

    def __str__(self) -> str:
        return f"Trade record #{self.index} is invalid: {self.reason}"
