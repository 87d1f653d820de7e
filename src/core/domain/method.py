"""
IntegrationMethod — правило численного интегрирования.

Закрытый набор из пяти правил. Номера меню консоли (1–5) соответствуют
порядку объявления.
"""

from enum import Enum


class IntegrationMethod(str, Enum):
    """Квадратурное правило."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"
    MIDPOINT = "MIDPOINT"
    TRAPEZOIDAL = "TRAPEZOIDAL"
    SIMPSON = "SIMPSON"

    @property
    def display_name(self) -> str:
        """Имя для вывода пользователю: "Left", "Simpson"."""
        return self.value.capitalize()

    @property
    def requires_even_partitions(self) -> bool:
        return self is IntegrationMethod.SIMPSON

    @classmethod
    def from_choice(cls, choice: int) -> "IntegrationMethod":
        """
        Номер пункта меню (1–5) → метод.

        Raises:
            ValueError: Если номер вне диапазона 1–5
        """
        members = list(cls)
        if isinstance(choice, bool) or not isinstance(choice, int) or not 1 <= choice <= len(members):
            raise ValueError(f"Method choice must be an integer 1-{len(members)}, got {choice!r}")
        return members[choice - 1]

    @classmethod
    def parse(cls, text: str) -> "IntegrationMethod":
        """
        Разбор метода из текста: номер меню ("5") или имя ("simpson").

        Raises:
            ValueError: Если текст не соответствует ни одному методу
        """
        value = text.strip()
        if value.isdigit():
            return cls.from_choice(int(value))
        try:
            return cls(value.upper())
        except ValueError:
            names = ", ".join(m.value.lower() for m in cls)
            raise ValueError(f"Unknown integration method {text!r} (expected 1-5 or one of: {names})")
