from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import numpy as np

from amortizer.errors import InvalidInput

logger = logging.getLogger(__name__)

# Flat 30-day step between due dates; calendar months are not modeled.
PERIOD_STEP = timedelta(days=30)

# All schedule arithmetic runs in single precision, the cents it produces
# depend on it (double precision gives 1610.47 for the 300k/360/5% loan).
_ZERO = np.float32(0)
_ONE = np.float32(1)
_TWELVE = np.float32(12)
_HUNDRED = np.float32(100)


@dataclass(frozen=True)
class PaymentRecord:
    """
    Una fila del cronograma de pagos.

    Attributes:
        period_number: Número de periodo, desde 1 y sin huecos.
        period_date: Fecha de vencimiento del pago (UTC).
        payment: Cuota fija del periodo.
        principal: Parte de la cuota que abona a capital.
        interest: Parte de la cuota que cubre el interés.
        cumulative_interest: Interés pagado hasta este periodo, inclusive.
        remaining_balance: Saldo pendiente después del pago.
    """
    period_number: int
    period_date: datetime
    payment: float
    principal: float
    interest: float
    cumulative_interest: float
    remaining_balance: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


AmortizationSchedule = List[PaymentRecord]


def round_up_to_cent(amount) -> np.float32:
    """Redondea hacia arriba al centavo: ceil(amount * 100) / 100."""
    return np.ceil(np.float32(amount) * _HUNDRED) / _HUNDRED


def _to_cents(amount) -> float:
    # Shortest repr of the single-precision value: 1610.46, not 1610.4599609375.
    return float(np.format_float_positional(round_up_to_cent(amount)))


def _as_float(value, parameter: str, message: str) -> float:
    if isinstance(value, bool):
        raise InvalidInput(message, parameter)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidInput(message, parameter) from e
    if not math.isfinite(number):
        raise InvalidInput(message, parameter)
    return number


def _validate(loan_amount, terms_in_months, annual_interest_rate) -> tuple[np.float32, int, np.float32]:
    amount = _as_float(loan_amount, "loan_amount", "El monto debe ser un número finito")
    if amount <= 0:
        raise InvalidInput("El monto debe ser mayor que cero", "loan_amount")

    if isinstance(terms_in_months, bool) or not isinstance(terms_in_months, (int, np.integer)):
        raise InvalidInput("El plazo debe ser un número entero de meses", "terms_in_months")
    if terms_in_months <= 0:
        raise InvalidInput("El plazo debe ser mayor que cero", "terms_in_months")

    rate = _as_float(annual_interest_rate, "annual_interest_rate", "La tasa de interés debe ser un número finito")
    if rate < 0:
        raise InvalidInput("La tasa de interés no puede ser negativa", "annual_interest_rate")

    with np.errstate(over="ignore"):
        amount32 = np.float32(amount)
        rate32 = np.float32(rate)
    if not np.isfinite(amount32):
        raise InvalidInput("El monto excede el rango soportado", "loan_amount")
    if amount32 <= _ZERO:
        raise InvalidInput("El monto debe ser mayor que cero", "loan_amount")
    if not np.isfinite(rate32):
        raise InvalidInput("La tasa de interés excede el rango soportado", "annual_interest_rate")
    return amount32, int(terms_in_months), rate32


def _monthly_rate(annual_interest_rate: np.float32) -> np.float32:
    return annual_interest_rate / _HUNDRED / _TWELVE


def _powi(base: np.float32, exponent: int) -> np.float32:
    """Potencia entera por cuadrados sucesivos, en precisión simple."""
    result = _ONE
    while True:
        if exponent & 1:
            result = result * base
        exponent //= 2
        if exponent == 0:
            break
        base = base * base
    return result


def _level_payment(loan: np.float32, terms: int, monthly_rate: np.float32) -> np.float32:
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        growth = _powi(_ONE + monthly_rate, terms)
        if monthly_rate == _ZERO or growth == _ONE:
            # Zero rate (or one too small to register): straight-line payment.
            payment = loan / np.float32(terms)
        else:
            payment = (loan * monthly_rate * growth) / (growth - _ONE)
        payment = round_up_to_cent(payment)
        first_interest = monthly_rate * loan

    if not np.isfinite(payment) or payment <= first_interest:
        raise InvalidInput(
            "El préstamo no se puede amortizar con estos parámetros: "
            "la cuota no cubre el interés del primer periodo"
        )
    return payment


def level_payment(loan_amount: float, terms_in_months: int, annual_interest_rate: float) -> float:
    """
    Cuota fija mensual, redondeada hacia arriba al centavo.

    :param loan_amount: Monto del préstamo
    :param terms_in_months: Plazo en meses
    :param annual_interest_rate: Tasa de interés anual en porcentaje
    :return: Cuota mensual
    """
    loan, terms, rate = _validate(loan_amount, terms_in_months, annual_interest_rate)
    return _to_cents(_level_payment(loan, terms, _monthly_rate(rate)))


def amortize(
    loan_amount: float,
    terms_in_months: int,
    annual_interest_rate: float,
    *,
    start: Optional[datetime] = None,
) -> AmortizationSchedule:
    """
    Genera el cronograma mensual de un préstamo a tasa fija.

    El plazo solo determina la cuota fija. Se emiten periodos hasta que el
    saldo llega a cero, lo que con el redondeo al centavo puede tomar un
    periodo más que el plazo nominal (300000 al 5% a 360 meses termina en
    el periodo 361 con un abono a capital de 3.81).

    El interés se calcula sobre el saldo sin redondear; cada monto del
    registro se redondea hacia arriba por separado, así que capital más
    interés puede diferir de la cuota en un centavo. El último abono a
    capital se limita al saldo pendiente.

    :param loan_amount: Monto del préstamo (> 0)
    :param terms_in_months: Plazo en meses (> 0)
    :param annual_interest_rate: Tasa de interés anual en porcentaje, ej. 5.0 (>= 0)
    :param start: Fecha del primer pago; por defecto, ahora (UTC)
    :return: Lista nueva de PaymentRecord, uno por periodo
    :raises InvalidInput: Si los parámetros no son válidos o el préstamo no
        se puede amortizar en precisión simple
    """
    loan, terms, annual_rate = _validate(loan_amount, terms_in_months, annual_interest_rate)
    monthly_rate = _monthly_rate(annual_rate)
    payment = _level_payment(loan, terms, monthly_rate)
    logger.debug("Level payment %s for loan=%s terms=%s rate=%s%%", payment, loan, terms, annual_rate)

    schedule: AmortizationSchedule = []
    balance = loan
    cumulative_interest = _ZERO
    period_date = start if start is not None else datetime.now(timezone.utc)
    period_number = 1

    while balance > _ZERO:
        interest = monthly_rate * balance
        principal = payment - interest
        if principal > balance:
            principal = balance

        cumulative_interest = cumulative_interest + interest
        remaining = balance - principal
        if not remaining < balance:
            raise InvalidInput(
                f"El préstamo no se puede amortizar: el saldo dejó de disminuir en el periodo {period_number}"
            )
        balance = remaining

        schedule.append(
            PaymentRecord(
                period_number=period_number,
                period_date=period_date,
                payment=_to_cents(payment),
                principal=_to_cents(principal),
                interest=_to_cents(interest),
                cumulative_interest=_to_cents(cumulative_interest),
                remaining_balance=_to_cents(balance),
            )
        )

        period_date = period_date + PERIOD_STEP
        period_number += 1

    logger.debug("Schedule finished after %d periods (nominal term %d)", len(schedule), terms)
    return schedule
