"""CLI client for the Loan Recast Analyzer API. Posts a loan plan and prints a terminal report.

Usage:
    python loan-analyzer/analyze_loan.py 400000 --rate 6.5 --term 30 --start 2025-01 --extra 6:50000
    python loan-analyzer/analyze_loan.py 400000 --extra 12:500:24 --forgive 60:20000 --recast "12, 24" --csv plan.csv

Payment format: MONTH:AMOUNT[:COUNT[:monthly|annually]]
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def parse_payment(text: str, is_forgiveness: bool = False) -> dict:
    """Parse MONTH:AMOUNT[:COUNT[:FREQUENCY]] into an API payment payload."""
    parts = text.split(":")
    if not 2 <= len(parts) <= 4:
        raise argparse.ArgumentTypeError(f"Bad payment {text!r}, expected MONTH:AMOUNT[:COUNT[:FREQUENCY]]")
    try:
        payment = {
            "month": int(parts[0]),
            "amount": str(Decimal(parts[1])),
            "is_forgiveness": is_forgiveness,
        }
        if len(parts) >= 3:
            payment["is_recurring"] = True
            payment["recurring_quantity"] = int(parts[2])
            payment["recurring_frequency"] = parts[3] if len(parts) == 4 else "monthly"
    except ArithmeticError as e:
        raise argparse.ArgumentTypeError(f"Bad amount in {text!r}") from e
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Bad month or count in {text!r}") from e
    if payment.get("recurring_frequency", "monthly") not in ("monthly", "annually"):
        raise argparse.ArgumentTypeError(f"Frequency must be monthly or annually in {text!r}")
    return payment


# ── Report sections ──────────────────────────────────────────────────────────

def print_summary(data: dict) -> None:
    result = data["result"]
    baseline = data["baseline"]
    _header("Loan Summary")
    print(f"  Principal:            {_dollar(result['principal'])}")
    print(f"  Term:                 {result['term_months']} months")
    print(f"  Initial Payment:      {_dollar(result['segments'][0]['payment'])}/mo")
    print(f"  Payoff:               {result['payoff_date']} (month {result['payoff_month']})")
    print(f"  Baseline Payoff:      {baseline['payoff_date']} (month {baseline['payoff_month']})")
    print()
    print(f"  Total Interest:       {_dollar(result['total_interest'])}")
    print(f"  Baseline Interest:    {_dollar(baseline['total_interest'])}")
    print(f"  Total Paid:           {_dollar(result['total_paid'])}")
    print(f"  Total Forgiven:       {_dollar(result['total_forgiveness'])}")
    print()
    print(f"  Interest Saved:       {_dollar(data['interest_saved'])}")
    print(f"  Months Saved:         {data['months_saved']}")


def print_segments(data: dict) -> None:
    segments = data["result"]["segments"]
    if len(segments) < 2:
        return
    _header("Payment Segments")
    for seg in segments:
        print(f"  From month {seg['start']:>4}:  {_dollar(seg['payment']):>12}/mo")


def print_events(data: dict) -> None:
    rows = [
        r for r in data["result"]["rows"]
        if float(r["extra_principal"]) > 0 or float(r["forgiven_principal"]) > 0 or r["recast"]
    ]
    if not rows:
        return
    _header("Extra Payments, Forgiveness & Recasts")
    print(f"  {'Mo':>4}  {'Date':>7}  {'Extra':>12}  {'Forgiven':>12}  {'Balance':>14}  {'New Pmt':>10}")
    print(f"  {'-' * 4}  {'-' * 7}  {'-' * 12}  {'-' * 12}  {'-' * 14}  {'-' * 10}")
    for r in rows:
        new_pmt = _dollar(r["new_payment"]) if r.get("new_payment") else ""
        print(
            f"  {r['idx']:>4}  {r['payment_date']:>7}  {_dollar(r['extra_principal']):>12}  "
            f"{_dollar(r['forgiven_principal']):>12}  {_dollar(r['loan_balance']):>14}  {new_pmt:>10}"
        )


# ── Main ─────────────────────────────────────────────────────────────────────

def build_payload(args: argparse.Namespace) -> dict:
    payload: dict = {
        "principal": str(args.principal),
        "annual_rate_pct": str(args.rate),
        "term_years": str(args.term),
        "start_ym": args.start,
        "payments": [parse_payment(s) for s in args.extra] + [parse_payment(s, True) for s in args.forgive],
        "recast_months": args.recast,
        "auto_recast": args.auto_recast,
        "strict": args.strict,
    }
    return payload


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Simulate a loan with extra payments and recasts via the Loan Recast Analyzer API"
    )
    parser.add_argument("principal", type=Decimal, help="Loan amount")
    parser.add_argument("--rate", type=Decimal, default=Decimal("4.85"), help="Annual rate in percent (default: 4.85)")
    parser.add_argument("--term", type=Decimal, default=Decimal("30"), help="Term in years (default: 30)")
    parser.add_argument("--start", default="2025-01", help="First payment month, YYYY-MM (default: 2025-01)")
    parser.add_argument("--extra", action="append", default=[], help="Extra payment MONTH:AMOUNT[:COUNT[:FREQ]]")
    parser.add_argument("--forgive", action="append", default=[], help="Forgiveness MONTH:AMOUNT[:COUNT[:FREQ]]")
    parser.add_argument("--recast", default="", help='Recast months, e.g. "12, 24-26"')
    parser.add_argument("--auto-recast", action="store_true", help="Recast after every extra payment")
    parser.add_argument("--strict", action="store_true", help="Reject inputs that fail validation")
    parser.add_argument("--csv", dest="csv_path", help="Also save the schedule as CSV to this path")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()
    try:
        payload = build_payload(args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    async with httpx.AsyncClient(timeout=30) as client:
        try:
            resp = await client.post(f"{args.api_url}/api/v1/schedule/compare", json=payload)
            csv_resp = None
            if args.csv_path and resp.status_code == 200:
                csv_resp = await client.post(f"{args.api_url}/api/v1/schedule/csv", json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn src.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            print(f"  {detail}", file=sys.stderr)
            sys.exit(1)

        data = resp.json()

    print_summary(data)
    print_segments(data)
    print_events(data)
    print()

    if csv_resp is not None:
        csv_resp.raise_for_status()
        with open(args.csv_path, "w", encoding="utf-8") as f:
            f.write(csv_resp.text)
        print(f"  Schedule written to {args.csv_path}")


if __name__ == "__main__":
    asyncio.run(main())
