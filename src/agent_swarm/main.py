# main.py
"""Command-line entry point for the agent swarm.

Usage:
    agent-swarm agents
    agent-swarm presets
    agent-swarm quick-tasks
    agent-swarm run "Add a password reset flow" --preset quick-build
    agent-swarm run "Review the scan page" --steps reviewer,builder --json
    agent-swarm run --quick "/dashboard" --preset full-feature

Press Ctrl-C during a run to stop after the current agent call is abandoned;
results gathered so far are still printed.
"""

import argparse
import json
import signal
import sys
from pathlib import Path
from typing import List, Optional

from .agent_client import AgentClient
from .agents import DEFAULT_PRESET, QUICK_TASKS, find_quick_task
from .config import config
from .events import (
    RunCancelled,
    RunCompleted,
    RunFailed,
    StepCompleted,
    StepStarted,
    results_of,
)
from .exceptions import SwarmError
from .executor import PipelineExecutor
from .logging_utils import get_logger, setup_logging
from .models import StepResult
from .registry import StepRegistry, default_registry
from .session import SwarmSession

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CANCELLED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="agent-swarm",
        description="Run a sequential multi-agent pipeline against a task",
        epilog="""
Examples:
  %(prog)s presets
  %(prog)s run "Add a password reset flow" --preset quick-build
  %(prog)s run "Audit the settings page" --steps reviewer,merger --json
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("agents", help="List available agents")
    subparsers.add_parser("presets", help="List pipeline presets")
    subparsers.add_parser("quick-tasks", help="List canned task descriptions")

    run = subparsers.add_parser("run", help="Run a pipeline")
    run.add_argument("task", nargs="?", default="", help="Task description")

    selection = run.add_mutually_exclusive_group()
    selection.add_argument(
        "--preset",
        "-p",
        default=None,
        help=f"Pipeline preset key (default: {DEFAULT_PRESET})",
    )
    selection.add_argument(
        "--steps",
        "-s",
        default=None,
        help="Comma-separated agent ids for a custom pipeline (e.g. analyst,builder)",
    )

    run.add_argument(
        "--quick",
        "-q",
        default=None,
        help="Use a canned task by label instead of TASK (see quick-tasks)",
    )
    run.add_argument(
        "--model", default=None, help=f"Model identifier (default: {config.AGENT_MODEL})"
    )
    run.add_argument(
        "--max-tokens",
        type=int,
        default=None,
        help=f"Max output tokens per agent (default: {config.AGENT_MAX_TOKENS})",
    )
    run.add_argument(
        "--json", action="store_true", help="Print the final results as JSON"
    )
    run.add_argument(
        "--output", "-o", type=Path, default=None, help="Write agent outputs to a markdown file"
    )

    return parser


def parse_steps(value: str) -> List[str]:
    """Split a comma-separated step list, dropping blanks and repeats."""
    steps: List[str] = []
    for part in value.split(","):
        step_id = part.strip().lower()
        if step_id and step_id not in steps:
            steps.append(step_id)
    return steps


def print_agents(registry: StepRegistry) -> None:
    for step in registry.list_steps():
        print(f"{step.icon} {step.id:12} {step.display_name:12} {step.role}")


def print_presets(registry: StepRegistry) -> None:
    for preset in registry.list_presets():
        print(f"{preset.key:16} {preset.name:20} {registry.display_chain(preset.steps)}")


def print_quick_tasks() -> None:
    for quick_task in QUICK_TASKS:
        print(f"{quick_task.label:20} {quick_task.task[:80]}...")


def render_markdown(task: str, label: str, results: List[StepResult], registry: StepRegistry) -> str:
    """Render a run's outputs as a single markdown document."""
    lines = [f"# {label}", "", f"**Task:** {task}", ""]
    for result in results:
        step = registry.get_step(result.step_id)
        lines.append(f"## {step.icon} {step.display_name}".rstrip())
        lines.append("")
        lines.append(
            f"_{result.input_units:,} in / {result.output_units:,} out tokens, "
            f"{result.elapsed_seconds:.1f}s_"
        )
        lines.append("")
        lines.append(result.content)
        lines.append("")
    return "\n".join(lines)


def run_pipeline(args: argparse.Namespace, session: SwarmSession) -> int:
    """Run the selected pipeline, printing progress as events arrive."""
    logger = get_logger(__name__)
    registry = session.registry

    task = args.task
    if args.quick:
        try:
            task = find_quick_task(args.quick).task
        except KeyError:
            print(f"Error: Unknown quick task: {args.quick}", file=sys.stderr)
            return EXIT_FAILED

    if args.steps is not None:
        # An explicit step list always means a custom pipeline, even when empty
        session.select_custom().clear()
        for step_id in parse_steps(args.steps):
            session.toggle_step(step_id)
    else:
        session.select_preset(args.preset or DEFAULT_PRESET)

    if not args.json:
        print(f"Pipeline: {session.pipeline_label} ({registry.display_chain(session.active_steps)})")
        print("-" * 60)

    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: session.stop())
    try:
        events = session.run(task)
        outcome = None
        for event in events:
            if isinstance(event, StepStarted):
                step = registry.get_step(event.step_id)
                logger.info(f"{step.display_name} working...", extra={"index": event.index})
                if not args.json:
                    print(f"[{event.index + 1}/{len(session.active_steps)}] {step.icon} {step.display_name} working...")
            elif isinstance(event, StepCompleted):
                if not args.json:
                    r = event.result
                    print(
                        f"    done: {r.input_units:,} in / {r.output_units:,} out, "
                        f"{r.elapsed_seconds:.1f}s (total {event.total_units:,} tokens)"
                    )
            else:
                outcome = event
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    results = results_of(outcome) if outcome is not None else list(session.results)

    if args.output:
        args.output.write_text(
            render_markdown(task, session.pipeline_label, results, registry), encoding="utf-8"
        )
        logger.info("Outputs written", extra={"path": str(args.output)})

    if args.json:
        payload = {
            "task": task,
            "pipeline": session.pipeline_label,
            "status": type(outcome).__name__,
            "error": session.error,
            "total_tokens": session.total_units,
            "results": [r.model_dump(mode="json") for r in results],
        }
        print(json.dumps(payload, indent=2))
    else:
        print("-" * 60)
        for result in results:
            step = registry.get_step(result.step_id)
            print(f"\n=== {step.display_name} ===\n{result.content}")
        print()

    if isinstance(outcome, RunCompleted):
        if not args.json:
            print(f"Completed {len(results)} agents, {outcome.total_units:,} tokens")
        return EXIT_OK
    if isinstance(outcome, RunCancelled):
        if not args.json:
            print(f"Stopped after {len(results)} agents", file=sys.stderr)
        return EXIT_CANCELLED
    if isinstance(outcome, RunFailed):
        print(f"Error: {outcome.message}", file=sys.stderr)
    return EXIT_FAILED


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the agent swarm CLI.

    Returns:
        Exit code (0 on success, 1 on failure, 130 when cancelled).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logger = setup_logging(
        level="DEBUG" if args.verbose else config.LOG_LEVEL,
        structured=config.SWARM_STRUCTURED_LOGS,
    )
    registry = default_registry()

    if args.command == "agents":
        print_agents(registry)
        return EXIT_OK
    if args.command == "presets":
        print_presets(registry)
        return EXIT_OK
    if args.command == "quick-tasks":
        print_quick_tasks()
        return EXIT_OK

    try:
        with AgentClient() as client:
            executor = PipelineExecutor(
                client,
                registry=registry,
                model=args.model,
                max_output_units=args.max_tokens,
            )
            session = SwarmSession(executor)
            return run_pipeline(args, session)
    except SwarmError as e:
        logger.error(f"Agent swarm error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
