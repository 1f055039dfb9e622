"""
Stock Pulse Chat entry point.
Analyzes each symbol and prints the recommendation table and summaries.
Run: python run.py AAPL MSFT
     python run.py "Should I buy Tesla?"
"""
import asyncio
import sys

from analysis.analyzer import StockAnalyzer
from analysis.query import extract_symbol
from common.errors import SymbolRequired
from common.logger import get_logger, new_request_id

logger = get_logger("run")

DEFAULT_SYMBOLS = ["AAPL", "MSFT", "GOOGL"]


async def run(args: list[str]) -> int:
    analyzer = StockAnalyzer()
    jobs = [(extract_symbol(a) or a.strip().upper(), a) for a in (args or DEFAULT_SYMBOLS)]
    results = []
    for symbol, query in jobs:
        new_request_id()
        try:
            results.append(await analyzer.analyze(symbol, query))
        except SymbolRequired as e:
            print(f"{query!r}: {e.message}")

    print("\n" + "=" * 72)
    print(f"{'Symbol':<8} {'Price':>10} {'Chg %':>8} {'P/E':>8} {'Sntmt':>6} {'Score':>6}  Action")
    print("-" * 72)
    for r in results:
        t, f, s, rec = r.technical, r.fundamental, r.sentiment, r.recommendation
        price = f"{t.price:>10.2f}" if t.price is not None else f"{'N/A':>10}"
        chg = f"{t.change_percent:>+8.2f}" if t.change_percent is not None else f"{'N/A':>8}"
        pe = f"{f.pe_ratio:>8.1f}" if f.pe_ratio is not None else f"{'N/A':>8}"
        snt = f"{s.score:>6.2f}" if s.score is not None else f"{'N/A':>6}"
        print(f"{r.symbol:<8} {price} {chg} {pe} {snt} {rec.score:>6}  {rec.action_emoji} {rec.action}")
    print("=" * 72 + "\n")

    for r in results:
        print(r.summary)
    return 0 if results else 1


def main():
    sys.exit(asyncio.run(run(sys.argv[1:])))


if __name__ == "__main__":
    main()
