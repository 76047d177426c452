"""
DayFraction — рациональное смещение даты в долях года

Immutable Pydantic модель {num / den}:
- num: смещение в днях относительно минимальной даты серии
- den: количество дней в году (365.0)

Используется как ключ словаря при компакции cash flows: две DayFraction
равны тогда и только тогда, когда совпадают num и den. Float-ключ
(num / den) не используется, чтобы исключить коллизии из-за округления.
"""

from pydantic import BaseModel, Field

from xirr_engine.core.math.numerical_safeguards import DAYS_IN_YEAR


class DayFraction(BaseModel):
    """
    Смещение в днях как доля года.

    Frozen модель: hashable, структурное равенство.
    """

    num: int = Field(..., description="Смещение в днях от минимальной даты")
    den: float = Field(DAYS_IN_YEAR, gt=0, description="Дней в году")

    model_config = {"frozen": True}

    def to_float(self) -> float:
        """
        Экспонента дисконтирования в годах.

        Examples:
            >>> DayFraction(num=730).to_float()
            2.0
        """
        return self.num / self.den

    def negative(self) -> "DayFraction":
        """Та же дробь с противоположным знаком числителя."""
        return DayFraction(num=-self.num, den=self.den)
