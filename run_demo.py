"""
End-to-end walkthrough of the health tracker against the in-memory store.

This script exercises:
1. Configuration loading
2. Account registration, login and password change
3. Health profile save, metrics and report
4. Daily check-ins, streaks and statistics

Run with: uv run python run_demo.py
"""

from datetime import date, timedelta

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from healthlog.config import get_config
from healthlog.log import configure_logging
from healthlog.services import CheckInService, HealthProfileService, UserAccountService
from healthlog.storage import InMemoryStore

console = Console()


class SteppingClock:
    """Calendar that can be moved forward one day at a time."""

    def __init__(self, start: date) -> None:
        self.current = start

    def __call__(self) -> date:
        return self.current

    def advance(self, days: int = 1) -> None:
        self.current += timedelta(days=days)


def demo_configuration() -> bool:
    console.print(Panel("🔧 Configuration", style="blue"))
    config = get_config()
    configure_logging(config.logging)

    console.print(f"Environment: {config.environment}")
    console.print(f"Log level: {config.logging.level} ({config.logging.format})")
    console.print(f"Streak lookback: {config.tracking.streak_lookback_days} days")
    console.print(f"Uniform login errors: {config.accounts.uniform_login_errors}")
    return True


def demo_accounts(store: InMemoryStore) -> bool:
    console.print(Panel("👤 Accounts", style="blue"))
    service = UserAccountService(store.users, get_config().accounts)

    attempts = [
        ("ab", "secret1", "secret1"),
        ("demo_user", "secret1", "secret1"),
        ("demo_user", "secret1", "secret1"),
    ]
    for username, password, confirm in attempts:
        result = service.register(username, password, confirm)
        console.print(f"register({username!r}): {result.message}")

    console.print(f"login(unknown): {service.login('nobody', 'secret1').message}")
    console.print(f"login(wrong password): {service.login('demo_user', 'nope123').message}")

    login = service.login("demo_user", "secret1")
    console.print(f"login(demo_user): {login.message}")
    if not login.success or login.user is None or login.user.id is None:
        return False

    change = service.change_password(login.user.id, "secret1", "secret2", "secret2")
    console.print(f"change_password: {change.message}")

    stats = service.get_user_statistics()
    console.print(f"Total users: {stats.total_users}")
    return change.success


def demo_health_profile(store: InMemoryStore) -> bool:
    console.print(Panel("📊 Health profile", style="blue"))
    service = HealthProfileService(store.profiles)

    rejected = service.save_profile(1, 350.0, 175.0, 30, "M", "moderate", 70.0)
    console.print(f"Out of range weight: {rejected.message}")

    first = service.save_profile(1, 82.0, 175.0, 30, "M", "moderate", 75.0)
    second = service.save_profile(1, 80.5, 175.0, 30, "M", "moderate", 75.0)
    console.print(f"First save: {first.message}")
    console.print(f"Second save: {second.message}")
    if not second.success or second.profile is None:
        return False

    metrics = service.derive_metrics(second.profile)
    table = Table(title="Derived metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("BMI", f"{metrics.bmi:.1f} ({metrics.bmi_category.value})")
    table.add_row("BMR", f"{metrics.bmr:.0f} kcal/day")
    table.add_row("TDEE", f"{metrics.tdee:.0f} kcal/day")
    table.add_row("Ideal weight", metrics.ideal_weight_range)
    console.print(table)

    console.print(service.render_report(1))
    console.print(f"History entries: {len(service.get_profile_history(1))}")
    return True


def demo_check_ins(store: InMemoryStore) -> bool:
    console.print(Panel("📅 Daily check-ins", style="blue"))
    clock = SteppingClock(date.today() - timedelta(days=4))
    service = CheckInService(store.check_ins, get_config().tracking, clock=clock)

    entries = [
        ("good", 7.5, 1800, 30),
        ("great", 8.0, 2200, 45),
        ("normal", 6.0, 1500, 0),
    ]
    for mood, sleep, water, exercise in entries:
        result = service.save_check_in(1, mood, sleep, water, exercise, "")
        console.print(f"{clock()}: {result.message}")
        clock.advance()

    # Skipping a day resets the streak
    clock.advance()
    result = service.save_check_in(1, "bad", 5.0, 1200, 10, "late night")
    console.print(f"{clock()}: {result.message}")

    stats = service.get_health_statistics(1, 7)
    table = Table(title=f"Last {stats.days} days")
    table.add_column("Statistic", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Check-ins", str(stats.total_check_ins))
    table.add_row("Avg sleep", f"{stats.average_sleep_hours:.1f} h")
    table.add_row("Avg water", f"{stats.average_water_intake:.0f} ml")
    table.add_row("Avg exercise", f"{stats.average_exercise_minutes:.0f} min")
    table.add_row("Moods", ", ".join(f"{m.value}={n}" for m, n in stats.mood_counts.items()))
    console.print(table)
    return service.get_consecutive_days(1) == 1


def run_demo() -> None:
    """Run every walkthrough step and print a summary."""
    console.print(Panel("🩺 Health Tracker - Walkthrough", style="bold blue"))

    store = InMemoryStore()
    steps = [
        ("Configuration", lambda: demo_configuration()),
        ("Accounts", lambda: demo_accounts(store)),
        ("Health profile", lambda: demo_health_profile(store)),
        ("Check-ins", lambda: demo_check_ins(store)),
    ]

    results = []
    for step_name, step in steps:
        console.print(f"\n{'=' * 60}")
        try:
            results.append((step_name, step()))
        except Exception as e:
            console.print(f"❌ {step_name} failed with exception: {e}", style="red")
            results.append((step_name, False))

    console.print(f"\n{'=' * 60}")
    summary_table = Table(title="Summary")
    summary_table.add_column("Step", style="cyan")
    summary_table.add_column("Result", style="white")
    for step_name, ok in results:
        summary_table.add_row(step_name, "✅ OK" if ok else "❌ FAILED")
    console.print(summary_table)


if __name__ == "__main__":
    try:
        run_demo()
    except KeyboardInterrupt:
        console.print("\n👋 Stopped by user", style="yellow")
