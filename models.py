from datetime import date as _date, datetime
from typing import Annotated, List, Literal, Optional, Tuple
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from config import DEFAULT_FOOD_BUDGET, DEFAULT_MISC_BUDGET


class InvalidOperation(ValueError):
    """Raised when a user action is rejected before any state changes."""


def _new_id() -> str:
    return str(uuid4())


def _as_local(value: datetime) -> datetime:
    # Stored blobs may carry a UTC suffix; everything downstream is naive local time
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


LocalDatetime = Annotated[datetime, AfterValidator(_as_local)]
Amount = Annotated[int, Field(ge=0)]
Month = Annotated[int, Field(ge=1, le=12)]


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DatedAmount(Record):
    id: str = Field(default_factory=_new_id)
    date: LocalDatetime
    amount: Amount


class IncomeLog(DatedAmount):
    is_savings_withdrawal: bool = False


class FoodLog(DatedAmount):
    pass


class ExpenseLog(DatedAmount):
    name: Optional[str] = None


class GasLog(Record):
    id: str = Field(default_factory=_new_id)
    date: LocalDatetime


class DebtTransaction(Record):
    id: str = Field(default_factory=_new_id)
    date: LocalDatetime
    amount: Amount
    type: Literal["payment", "withdrawal"]
    reason: Optional[str] = None


OPENING_BALANCE_REASON = "Opening balance"


def settled_amount(transactions: List[DebtTransaction]) -> int:
    """Payments minus withdrawals, never below zero."""
    paid = sum(t.amount for t in transactions if t.type == "payment")
    withdrawn = sum(t.amount for t in transactions if t.type == "withdrawal")
    return max(0, paid - withdrawn)


class Debt(Record):
    id: str = Field(default_factory=_new_id)
    name: str
    source: str = ""
    total_amount: Amount
    amount_paid: Amount = 0
    due_date: LocalDatetime
    created_at: LocalDatetime
    target_month: Optional[Month] = None
    target_year: Optional[int] = None
    transactions: List[DebtTransaction] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _zero_based_month(cls, data):
        # Exports stamped in UTC ("...Z") come from the browser app, which counts January as 0
        if not isinstance(data, dict):
            return data
        due = data.get("dueDate", data.get("due_date"))
        key = "targetMonth" if "targetMonth" in data else "target_month"
        month = data.get(key)
        if isinstance(due, str) and due.endswith("Z") and isinstance(month, int):
            data = {**data, key: month + 1}
        return data

    @model_validator(mode="after")
    def _opening_balance(self):
        """
        A stored paid amount the ledger does not explain becomes one opening
        transaction dated at creation, so later payments build on it.
        """
        if self.amount_paid == settled_amount(self.transactions):
            return self
        net = sum(t.amount if t.type == "payment" else -t.amount for t in self.transactions)
        diff = self.amount_paid - net
        if diff > 0:
            opening = DebtTransaction(date=self.created_at, amount=diff, type="payment")
        else:
            opening = DebtTransaction(date=self.created_at, amount=-diff, type="withdrawal",
                                      reason=OPENING_BALANCE_REASON)
        self.transactions = [opening] + self.transactions
        return self

    @property
    def remaining(self) -> int:
        return self.total_amount - self.amount_paid

    @property
    def is_active(self) -> bool:
        return self.amount_paid < self.total_amount

    @property
    def bucket(self) -> Tuple[int, int]:
        """(month, year) reporting bucket, falling back to the due date."""
        month = self.target_month if self.target_month is not None else self.due_date.month
        year = self.target_year if self.target_year is not None else self.due_date.year
        return month, year


class RecurringTemplate(Record):
    name: str
    source: str = ""
    total_amount: Amount
    start_date: LocalDatetime
    end_date: LocalDatetime
    frequency: Literal["weekly", "monthly"] = "monthly"


class Holiday(Record):
    id: str
    name: str
    date: _date
    is_taking_off: bool = False
    start_date: Optional[_date] = None
    end_date: Optional[_date] = None
    note: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, v):
        if isinstance(v, str) and len(v) > 10:
            return v[:10]
        return v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _blank_is_unset(cls, v):
        if isinstance(v, str):
            v = v.strip()[:10]
            return v or None
        return v

    @field_validator("note", mode="before")
    @classmethod
    def _note_text(cls, v):
        return v or ""


class FilterState(Record):
    type: Literal["all", "year", "month", "week"]
    year: int
    month: Optional[Month] = None
    week: Optional[Annotated[int, Field(ge=1, le=53)]] = None


class AppState(Record):
    gas_history: List[GasLog] = Field(default_factory=list)
    last_wifi_payment: Optional[LocalDatetime] = None
    debts: List[Debt] = Field(default_factory=list)
    income_logs: List[IncomeLog] = Field(default_factory=list)
    food_logs: List[FoodLog] = Field(default_factory=list)
    misc_logs: List[ExpenseLog] = Field(default_factory=list)
    savings_balance: Amount = 0
    food_budget: Amount = DEFAULT_FOOD_BUDGET
    misc_budget: Amount = DEFAULT_MISC_BUDGET
    holidays: List[Holiday] = Field(default_factory=list)

    @property
    def active_debts(self) -> List[Debt]:
        return [d for d in self.debts if d.is_active]

    @property
    def completed_debts(self) -> List[Debt]:
        return [d for d in self.debts if not d.is_active]
