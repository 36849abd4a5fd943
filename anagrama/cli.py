"""CLI entry point for the anagram transformer."""

import argparse
import asyncio
import logging
from pathlib import Path

from anagrama.config import Config, TimingConfig, load_config
from anagrama.content import list_text_sets, load_corpus
from anagrama.controller import AnagramEngine, next_index
from anagrama.engine.matcher import check_balance
from anagrama.engine.tokenizer import tokenize
from anagrama.engine.typography import plan_typography
from anagrama.messages import get_messages, phase_description, subtitle_for
from anagrama.models import Corpus, EngineSnapshot, LetterRole, TypographyPlan


def scaled_timing(timing: TimingConfig, speed: float) -> TimingConfig:
    """Timing table with every duration divided by `speed`."""
    if speed <= 0:
        raise ValueError("speed must be positive")
    return TimingConfig(**{k: v / speed for k, v in timing.model_dump().items()})


async def play(corpus: Corpus, config: Config, width: float, height: float, cycles: int) -> int:
    """Run `cycles` live transformations, printing phases and progress."""
    engine = AnagramEngine(corpus, config)
    engine.resize(width, height)
    if not engine.is_ready:
        print(f"Container {width}x{height} is not usable; nothing to play.")
        return 0

    last_phase = None
    last_decile = -1

    def report(snap: EngineSnapshot) -> None:
        nonlocal last_phase, last_decile
        if snap.phase is not None and snap.phase != last_phase:
            print(f"  [{snap.phase.value}]")
            last_phase = snap.phase
        decile = int(snap.progress_percent // 10)
        if snap.is_running and decile > last_decile:
            print(f"  {snap.progress_percent:5.1f}%")
            last_decile = decile

    engine.subscribe(report)
    completed = 0
    try:
        for _ in range(cycles):
            print(f"{subtitle_for(corpus, engine.index)} -> {subtitle_for(corpus, engine.target_index)}")
            print(f"  {phase_description(engine.status, corpus.language)}")
            last_phase, last_decile = None, -1
            if not await engine.start():
                break
            completed += 1
    finally:
        await engine.close()
    return completed


def check(corpus: Corpus, plan: TypographyPlan) -> bool:
    """Print the letter balance of every consecutive pair; True if all balance."""
    all_balanced = True
    seen: set[tuple[int, int]] = set()
    for i in range(len(corpus.texts)):
        j = next_index(i, len(corpus.texts))
        if (i, j) in seen:
            continue
        seen.add((i, j))
        source = tokenize(corpus.texts[i], LetterRole.SOURCE, plan)
        target = tokenize(corpus.texts[j], LetterRole.TARGET, plan)
        report = check_balance(source, target)
        all_balanced = all_balanced and report.balanced
        print(f"  {i} -> {j}: {report}")
    return all_balanced


def main() -> None:
    parser = argparse.ArgumentParser(description="Anagram Transformer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument(
        "--texts", default=None,
        help="Text set name (texts/<name>.json). Defaults to the configured set.",
    )
    sub = parser.add_subparsers(dest="command")

    # play command
    play_parser = sub.add_parser("play", help="Run transformations live in the terminal")
    play_parser.add_argument("--cycles", type=int, default=1, help="Number of cycles to run")
    play_parser.add_argument("--speed", type=float, default=1.0, help="Playback speed multiplier")
    play_parser.add_argument("--width", type=float, default=None)
    play_parser.add_argument("--height", type=float, default=None)

    # render command
    render_parser = sub.add_parser("render", help="Export one transformation as an animated GIF")
    render_parser.add_argument("output", type=Path, help="Output .gif path")
    render_parser.add_argument("--index", type=int, default=0, help="Source text index")
    render_parser.add_argument("--speed", type=float, default=1.0, help="Playback speed multiplier")

    # plan command
    plan_parser = sub.add_parser("plan", help="Show the shared typography for a container size")
    plan_parser.add_argument("width", type=float)
    plan_parser.add_argument("height", type=float)

    # check command
    sub.add_parser("check", help="Report letter balance between consecutive texts")

    # texts command
    sub.add_parser("texts", help="List available text sets and the loaded corpus")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command in ("play", "render") and args.speed <= 0:
        parser.error("--speed must be positive")

    config = load_config(args.config)
    corpus = load_corpus(args.texts, config.content)

    if args.command == "play":
        config.timing = scaled_timing(config.timing, args.speed)
        width = args.width if args.width is not None else config.render.width
        height = args.height if args.height is not None else config.render.height
        completed = asyncio.run(play(corpus, config, width, height, args.cycles))
        print(f"\nCompleted {completed} of {args.cycles} cycles")

    elif args.command == "render":
        from anagrama.output.frames import render_cycle

        if not 0 <= args.index < len(corpus.texts):
            print(f"Index {args.index} out of range (corpus has {len(corpus.texts)} texts)")
            return
        config.timing = scaled_timing(config.timing, args.speed)
        result = render_cycle(corpus, args.index, args.output, config)
        print(
            f"Output: {result.output_path} ({result.frame_count} frames, "
            f"{result.pairs} letters moved, {result.unmatched} unmatched)"
        )

    elif args.command == "plan":
        plan = plan_typography(corpus.texts, args.width, args.height, config.typography)
        if plan is None:
            print("Not ready: container or corpus is empty.")
            return
        for key, value in plan.model_dump().items():
            print(f"  {key}: {value}")

    elif args.command == "check":
        plan = plan_typography(corpus.texts, config.render.width, config.render.height, config.typography)
        if plan is None:
            print("Not ready: container or corpus is empty.")
            return
        print(f"{corpus.title}:")
        if check(corpus, plan):
            print("\nAll pairs are balanced anagrams.")
        else:
            print("\nSome letters will stay in place.")

    elif args.command == "texts":
        names = list_text_sets(config.content)
        print("Available text sets:")
        for name in names:
            print(f"  {name}")
        messages = get_messages(corpus.language)
        print(f"\n{corpus.title} ({corpus.language.value})")
        for i, text in enumerate(corpus.texts):
            first_line = text.split("\n", 1)[0]
            print(f"  {i}. {subtitle_for(corpus, i)}: {first_line}")
        print(f"\n{messages['about_note']}")

    else:
        parser.print_help()


if __name__ == "__main__":
    main()
