from datetime import datetime

from pydantic import BaseModel, Field, conint, confloat

# Terms are bounded to the signed 16-bit range.
MAX_TERMS_IN_MONTHS = 32767


class AmortizationRequest(BaseModel):
    loan_amount: confloat(gt=0, allow_inf_nan=False) = Field(..., description="Monto del préstamo")
    terms_in_months: conint(gt=0, le=MAX_TERMS_IN_MONTHS) = Field(..., description="Plazo en meses")
    annual_interest_rate: confloat(ge=0, allow_inf_nan=False) = Field(..., description="Tasa de interés anual en porcentaje")


class PaymentRecordResponse(BaseModel):
    period_number: int = Field(..., description="Número de periodo, desde 1")
    period_date: datetime = Field(..., description="Fecha de vencimiento del pago")
    payment: float = Field(..., description="Cuota del periodo")
    principal: float = Field(..., description="Abono a capital")
    interest: float = Field(..., description="Interés del periodo")
    cumulative_interest: float = Field(..., description="Interés acumulado")
    remaining_balance: float = Field(..., description="Saldo pendiente")
