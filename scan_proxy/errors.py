# scan_proxy/errors.py


class ProxyError(Exception):
    """Base class for errors raised by the proxy itself."""


class ConfigurationError(ProxyError):
    pass


class UnsupportedModel(ProxyError):
    def __init__(self, model):
        self.model = str(model)
        super().__init__(f"Unsupported model: {self.model}")
