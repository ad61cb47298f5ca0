class PicoCartError(Exception):
    pass

class CartProviderError(PicoCartError):
    def __init__(self):
        super().__init__("use_cart must be used within a CartProvider")

class CorruptCartStateError(PicoCartError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Persisted cart could not be decoded: {reason}")

class InvalidSettingsError(PicoCartError):
    def __init__(self, section: str, detail: str):
        super().__init__(f"Invalid '{section}' settings: {detail}")
