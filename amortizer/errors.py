"""Errores del amortizador."""


class AmortizationError(ValueError):
    """Error base del amortizador."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(AmortizationError):
    """Parámetros inválidos, o un préstamo que no se puede amortizar."""

    def __init__(self, message: str, parameter: str | None = None):
        super().__init__(message)
        self.parameter = parameter
