class ProbeFailure(Exception):
    """
    Raised by a probe when its dependency is reachable but not in a usable state.
    """
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)
