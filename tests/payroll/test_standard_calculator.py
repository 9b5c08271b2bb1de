from src.hr_assistant.hr_assistant.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_standard_calculator_rounds_to_cents():
    calc = StandardPayrollCalculator()

    figures = calc.calculate(hourly_rate=12.345, total_work_hours=160, bonus=100.004, deductions=50)

    assert figures.base_salary == 1975.2
    assert figures.bonus == 100.0
    assert figures.deductions == 50.0
    assert figures.net_salary == 2025.2


def test_deductions_can_make_net_negative():
    figures = StandardPayrollCalculator().calculate(hourly_rate=10, total_work_hours=1, deductions=25)

    assert figures.net_salary == -15.0
