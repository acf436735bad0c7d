from __future__ import annotations
import argparse, json, os, sys
from dataclasses import asdict

from headlines import Engine
from headlines import config as CFG

def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Generate phrases from a Markov chain built over a corpus")
    p.add_argument("--corpus", required=True, help="Corpus file, folder, or '-' for stdin (one phrase per line)")
    p.add_argument("-p", "--prefix-length", type=int, default=CFG.PREFIX_LENGTH, help="Tokens per chain state")
    p.add_argument("-n", "--max-length", type=int, default=CFG.MAX_LENGTH, help="Max tokens per phrase")
    p.add_argument("-c", "--count", type=int, default=CFG.COUNT, help="Phrases to generate")
    p.add_argument("--seed", type=int, default=CFG.SEED, help="Random seed for reproducible output")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--repl", action="store_true", help="Interactive loop after build")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if args.prefix_length < 1:
        p.error("--prefix-length must be >= 1")
    if args.max_length < args.prefix_length:
        p.error("--max-length must be >= --prefix-length")
    if not 1 <= args.count <= CFG.MAX_COUNT:
        p.error(f"--count must be between 1 and {CFG.MAX_COUNT}")

    # tokens can carry raw non-UTF-8 bytes; write them back out unchanged
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="surrogateescape")

    eng = Engine()
    try:
        try:
            eng.build(args.corpus, prefix_length=args.prefix_length, seed=args.seed, verbose=args.verbose)
        except OSError as exc:
            print(f"error: cannot read corpus: {exc}", file=sys.stderr)
            return 2

        def run_once(count: int):
            rows = eng.generate(args.max_length, count=count, fatal=True)
            if args.json:
                print(json.dumps([asdict(r) for r in rows], ensure_ascii=False, indent=2))
            else:
                for r in rows:
                    print(r.text)

        if not args.repl:
            run_once(args.count)
            return 0

        print("Press Enter for a new phrase, type a number for that many, 'q' to quit.")
        print(_c(f"prefix_length={args.prefix_length} max_length={args.max_length}", "2;37"))
        while True:
            try:
                raw = input("> ").strip()
            except (EOFError, KeyboardInterrupt):
                print(); break
            if raw.lower() in ("q", ":q", "quit", "exit"):
                break
            if raw.isdigit() and 1 <= int(raw) <= CFG.MAX_COUNT:
                run_once(int(raw))
            elif raw:
                print(_c(f"(expected a number between 1 and {CFG.MAX_COUNT})", "2;36"))
            else:
                run_once(1)
        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    sys.exit(main())
