from amortizer.services.amortization import (
    AmortizationSchedule,
    PaymentRecord,
    amortize,
    level_payment,
    round_up_to_cent,
)

__all__ = [
    "AmortizationSchedule",
    "PaymentRecord",
    "amortize",
    "level_payment",
    "round_up_to_cent",
]
