"""
Sales Control Command Line Interface

Trigger the daily report jobs, run the queue worker and the scheduler, and
prepare a database with demo data.
"""

import datetime as dt

import click
from tabulate import tabulate

from sales_control.bootstrap import build_container, init_database, register_daily_schedules
from sales_control.core.config import Settings
from sales_control.core.container import DIContainer
from sales_control.core.exceptions import InvalidReportDateException
from sales_control.core.logging import get_logger
from sales_control.domain.dates import coerce_date, today
from sales_control.domain.interfaces import ISalesReportService, ITaskQueue
from sales_control.jobs import DAILY_REPORT_JOBS, JobDispatcher
from sales_control.scheduling import ReportScheduler
from sales_control.seeding import seed_demo_data

logger = get_logger(__name__)


def _container(ctx: click.Context) -> DIContainer:
    ctx.ensure_object(dict)
    if "container" not in ctx.obj:
        ctx.obj["container"] = build_container()
    return ctx.obj["container"]


def _parse_date(value: str | None) -> dt.date | None:
    if value is None:
        return None
    try:
        return coerce_date(value, InvalidReportDateException)
    except InvalidReportDateException:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date", param_hint="DATE") from None


def _money(value) -> str:
    return f"{value:,.2f}"


@click.group()
@click.pass_context
def cli(ctx):
    """Sales Control: daily sales reports for administrators and sellers"""
    ctx.ensure_object(dict)


@cli.group()
def reports():
    """Daily sales reports"""


@reports.command("send-daily")
@click.argument("report_date", metavar="[DATE]", required=False)
@click.option("--sync", is_flag=True, help="Execute synchronously without queue")
@click.pass_context
def send_daily(ctx, report_date, sync):
    """Send daily sales reports to admin and sellers"""
    day = _parse_date(report_date)
    container = _container(ctx)
    dispatcher = container.resolve(JobDispatcher)
    settings = container.resolve(Settings)
    day = day or today(settings.report_timezone)

    click.echo("🔄 Sending daily sales reports...")
    rows = []
    for job_name in DAILY_REPORT_JOBS:
        click.echo(f"   {job_name}")
        try:
            dispatch = dispatcher.dispatch(job_name, day, sync=sync)
        except Exception as e:
            click.echo(f"❌ {job_name} failed: {e}")
            raise click.ClickException(str(e))

        if dispatch.queued:
            rows.append([job_name, dispatch.task_id])
        else:
            result = dispatch.result
            rows.append([job_name, result.total_recipients, result.sent_count, result.failed_count])

    click.echo("")
    if sync:
        click.echo("✅ Reports sent successfully!")
        click.echo(tabulate(rows, headers=["Job", "Recipients", "Sent", "Failed"], tablefmt="simple"))
    else:
        click.echo("✅ Jobs added to queue successfully!")
        click.echo(tabulate(rows, headers=["Job", "Task ID"], tablefmt="simple"))
        click.echo("⚠️  Make sure the queue worker is running: sales-control worker")

    click.echo(f"Report date: {day.isoformat()}")


@reports.command("show")
@click.argument("report_date", metavar="[DATE]", required=False)
@click.pass_context
def show(ctx, report_date):
    """Print the reports of a date without sending anything"""
    day = _parse_date(report_date)
    report_service = _container(ctx).resolve(ISalesReportService)

    report = report_service.generate_daily_sales_report(day)
    click.echo(f"📊 Daily Sales Report - {report.report_date.strftime('%d/%m/%Y')}")
    click.echo(f"   Sales: {report.total_sales}")
    click.echo(f"   Total: {_money(report.total_amount)}")
    click.echo(f"   Commission: {_money(report.total_commission)}")

    seller_reports = report_service.generate_daily_sales_report_by_seller(report.report_date)
    if not seller_reports:
        click.echo("\nNo sales found for this date.")
        return

    click.echo("")
    click.echo(tabulate(
        [
            [r.seller_name, r.seller_email, r.total_sales, _money(r.total_amount), _money(r.total_commission)]
            for r in seller_reports
        ],
        headers=["Seller", "E-mail", "Sales", "Total", "Commission"],
        tablefmt="grid",
    ))


@cli.command()
@click.pass_context
def worker(ctx):
    """Consume report jobs from the queue"""
    container = _container(ctx)
    dispatcher = container.resolve(JobDispatcher)
    task_queue = container.resolve(ITaskQueue)

    click.echo("👷 Worker started, waiting for report jobs (Ctrl+C to stop)")
    try:
        task_queue.consume(dispatcher.handle_task)
    except KeyboardInterrupt:
        click.echo("Worker stopped")
    finally:
        task_queue.close()


@cli.command()
@click.option("--queue", "use_queue", is_flag=True, help="Publish due jobs to the queue instead of running them here")
@click.pass_context
def scheduler(ctx, use_queue):
    """Run the daily report schedule"""
    container = _container(ctx)
    report_scheduler = container.resolve(ReportScheduler)
    report_scheduler.run_sync = not use_queue
    register_daily_schedules(report_scheduler, container.resolve(Settings))

    click.echo("📅 Schedule:")
    click.echo(tabulate(
        [[s["name"], s["cron"], s["timezone"], s["next_run"]] for s in report_scheduler.get_status()],
        headers=["Job", "Cron", "Timezone", "Next run"],
        tablefmt="simple",
    ))
    try:
        report_scheduler.run_forever()
    except KeyboardInterrupt:
        report_scheduler.stop()
        click.echo("Scheduler stopped")


@cli.group()
def db():
    """Database management"""


@db.command("init")
@click.pass_context
def db_init(ctx):
    """Create the database tables"""
    init_database(_container(ctx))
    click.echo("✅ Database tables created")


@db.command("seed")
@click.option("--date", "seed_date", help="Date of the 'today' sales (YYYY-MM-DD); defaults to today")
@click.pass_context
def db_seed(ctx, seed_date):
    """Insert demo sellers, sales and an administrator"""
    day = _parse_date(seed_date)
    container = _container(ctx)
    init_database(container)
    day = day or today(container.resolve(Settings).report_timezone)

    try:
        summary = seed_demo_data(container, day)
    except Exception as e:
        click.echo(f"❌ Seeding failed: {e}")
        raise click.ClickException(str(e))

    for seller in summary.sellers:
        click.echo(f"Seller created: {seller.name} ({seller.email})")
    click.echo(f"{len(summary.sales)} sales created")
    click.echo("")
    click.echo(f"Expected report summary for {day.isoformat()}:")
    click.echo(tabulate(
        [
            [r.seller_name, r.seller_email, r.total_sales, _money(r.total_amount), _money(r.total_commission)]
            for r in summary.expected_reports
        ],
        headers=["Seller", "E-mail", "Sales", "Total", "Commission"],
        tablefmt="grid",
    ))
    for seller in summary.sellers_without_sales:
        click.echo(f"{seller.name} does not have sales on {day.isoformat()} and will not receive an e-mail")
    click.echo("")
    click.echo("To send the reports, execute:")
    click.echo(f"   sales-control reports send-daily {day.isoformat()} --sync")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
