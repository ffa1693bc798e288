"""
WBS Progress Tracker
====================

Command line access to a stored work breakdown structure.
"""

import argparse
import logging
import sys

from wbs.config import config
from wbs.domain.task import Task, TaskError, Dependency
from wbs.domain.project import ProjectInfoError
from wbs.services.store import WBSStore, StoreError
from wbs.services.reporting import (
    project_summary,
    format_summary,
    timeline_days,
    validate_weights,
)


def parse_dependency(value):
    """Parse PRED or PRED:TYPE into a Dependency"""
    predecessor_id, _, dep_type = value.partition(":")
    try:
        return Dependency(predecessor_id, dep_type or "FS")
    except TaskError as e:
        raise argparse.ArgumentTypeError(str(e))


def add_task_fields(parser, required=False):
    parser.add_argument("--name", required=required, help="Task name")
    parser.add_argument("--weight", type=int, help="Weight (0-100)")
    parser.add_argument("--progress", type=int, help="Progress (0-100)")
    parser.add_argument("--level", type=int, help="Nesting level (derived if omitted)")
    parser.add_argument("--start", dest="start_date", help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", dest="end_date", help="End date (YYYY-MM-DD)")
    parser.add_argument(
        "--status", help="On Track, On Going, At Risk or Delayed (or ON_TRACK, ...)"
    )
    parser.add_argument(
        "--dep",
        dest="dependencies",
        action="append",
        type=parse_dependency,
        help="Predecessor as ID or ID:TYPE (FS, SS, SF, FF); repeatable",
    )


def task_fields(args):
    fields = {}
    for name in (
        "name",
        "weight",
        "progress",
        "level",
        "start_date",
        "end_date",
        "status",
        "dependencies",
    ):
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = value
    return fields


def build_parser():
    parser = argparse.ArgumentParser(description="Work Breakdown Structure tracking")
    parser.add_argument(
        "--project",
        default=config["default_project"],
        help="Project identifier (default: %(default)s)",
    )
    parser.add_argument(
        "--storage-dir",
        default=config["storage_dir"],
        help="Directory holding project files (default: %(default)s)",
    )
    parser.add_argument(
        "--flat",
        action="store_true",
        help="Treat every task as a manual top-level task (no rollup)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject weight/progress edits on calculated tasks",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("list", help="List all tasks")

    add_parser = subparsers.add_parser("add", help="Add a task")
    add_parser.add_argument("id", help="Dotted task id, e.g. 1.0 or 1.2.1")
    add_task_fields(add_parser, required=True)

    update_parser = subparsers.add_parser("update", help="Update a task")
    update_parser.add_argument("id", help="Id of the task to update")
    update_parser.add_argument("--new-id", dest="new_id", help="Rename the task id")
    add_task_fields(update_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("id", help="Id of the task to delete")

    subparsers.add_parser("reset", help="Remove all tasks")
    subparsers.add_parser("summary", help="Print the progress report")

    for command, default, help_text in (
        ("scurve", "s_curve.png", "Save the S-curve chart"),
        ("gantt", "gantt.png", "Save the Gantt chart"),
        ("report", "project-report.pdf", "Export the PDF report"),
    ):
        chart_parser = subparsers.add_parser(command, help=help_text)
        chart_parser.add_argument(
            "--output", default=default, help="Output filename (default: %(default)s)"
        )

    subparsers.add_parser("example", help="Load the sample project")

    info_parser = subparsers.add_parser("info", help="Set project information")
    info_parser.add_argument("--name", help="Project name")
    info_parser.add_argument("--owner", help="Project owner")
    info_parser.add_argument("--executor", help="Executing team")

    return parser


def print_tasks(tasks, flat=False):
    if not tasks:
        print("No tasks.")
        return

    print(
        f"{'ID':<12}{'Task Name':<28}{'Weight':>7}{'Progress':>10}  "
        f"{'Status':<10}{'Days':>5}  Dependencies"
    )
    for task in tasks:
        name = ("  " * task.level + task.name)[:27]
        marker = "*" if task.is_calculated else " "
        days = timeline_days(task)
        deps = ", ".join(f"{d.predecessor_id} ({d.type})" for d in task.dependencies)
        print(
            f"{task.id:<12}{name:<28}{task.weight:>6}{marker}{task.progress:>9}%  "
            f"{task.status:<10}{days if days is not None else '-':>5}  {deps}"
        )
    print("* calculated from sub-tasks")

    validation = validate_weights(tasks, flat=flat)
    if not validation.is_valid:
        print(f"Warning: top-level weights sum to {validation.total}%, expected 100%")


def run(args, store):
    if args.command == "list":
        print_tasks(store.tasks, flat=store.flat)
    elif args.command == "add":
        fields = task_fields(args)
        store.add_task(Task(args.id, **fields))
        print(f"Added task {args.id}")
    elif args.command == "update":
        fields = task_fields(args)
        if args.new_id:
            fields["id"] = args.new_id
        store.update_task(args.id, **fields)
        print(f"Updated task {args.id}")
    elif args.command == "delete":
        store.delete_task(args.id)
        print(f"Deleted task {args.id}")
    elif args.command == "reset":
        store.reset()
        print(f"Cleared all tasks of project {store.project_id}")
    elif args.command == "summary":
        summary = project_summary(
            store.tasks, project_info=store.project_info, flat=store.flat
        )
        print(format_summary(summary))
    elif args.command == "scurve":
        from wbs.visualization.s_curve import create_s_curve_chart

        create_s_curve_chart(
            store.tasks,
            filename=args.output,
            show=False,
            project_name=store.project_info.name,
            flat=store.flat,
        )
        print(f"S-curve saved to {args.output}")
    elif args.command == "gantt":
        from wbs.visualization.gantt import create_gantt_chart

        fig = create_gantt_chart(store.tasks, filename=args.output, show=False)
        if fig is None:
            return 1
        print(f"Gantt chart saved to {args.output}")
    elif args.command == "report":
        from wbs.visualization.report import export_pdf_report

        pages = export_pdf_report(
            store.tasks,
            args.output,
            project_info=store.project_info,
            flat=store.flat,
        )
        print(f"Report ({pages} pages) saved to {args.output}")
    elif args.command == "example":
        from wbs.examples.sample_project import create_sample_project

        create_sample_project(store)
    elif args.command == "info":
        info = store.update_project_info(
            name=args.name, owner=args.owner, executor=args.executor
        )
        print(f"Project: {info.name} / Owner: {info.owner} / Executor: {info.executor}")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(config["log_level"]).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        store = WBSStore(
            project_id=args.project,
            storage_dir=args.storage_dir,
            rollup=not args.flat,
            strict=args.strict,
        )
        return run(args, store)
    except (TaskError, StoreError, ProjectInfoError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
