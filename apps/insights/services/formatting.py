"""pt-BR formatting for reports and generated messages."""

from decimal import Decimal, ROUND_HALF_UP

MONTH_NAMES = [
    'janeiro', 'fevereiro', 'março', 'abril', 'maio', 'junho',
    'julho', 'agosto', 'setembro', 'outubro', 'novembro', 'dezembro',
]


def format_brl(amount) -> str:
    """Decimal('1234.5') -> 'R$ 1.234,50'."""
    value = Decimal(str(amount)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    integer, cents = f"{abs(value):.2f}".split('.')
    grouped = f"{int(integer):,}".replace(',', '.')
    sign = '-' if value < 0 else ''
    return f"{sign}R$ {grouped},{cents}"


def format_date(value) -> str:
    return value.strftime('%d/%m/%Y')


def format_day_month(value) -> str:
    """date(2025, 3, 5) -> '05 de março'."""
    return f"{value.day:02d} de {MONTH_NAMES[value.month - 1]}"


def format_reference_month(reference: str) -> str:
    """'2025-03' -> 'março de 2025'; anything unparsable is returned as-is."""
    try:
        year, month = reference.split('-')[:2]
        return f"{MONTH_NAMES[int(month) - 1]} de {int(year)}"
    except (ValueError, IndexError, AttributeError):
        return reference or '-'


def months_ago(value, months: int):
    """Same day ``months`` earlier, clamped to the end of shorter months."""
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    for day in (value.day, 30, 29, 28):
        try:
            return value.replace(year=year, month=month, day=day)
        except ValueError:
            continue
    raise ValueError(f"Cannot shift {value} by {months} months")
