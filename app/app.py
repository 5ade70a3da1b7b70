import argparse
import sys
from core.config import BASE_URL, IDENTITY, PASSWORD, LOG_LEVEL
from core.logging_setup import setup_logging
from core.models import Task
from storage.pocketbase import PocketBaseClient, PBError
from controller.app_controller import AppController


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="study-tasks", description="Subjects and tasks stored in PocketBase.")
    p.add_argument("--url", default=BASE_URL)
    p.add_argument("--identity", default=IDENTITY)
    p.add_argument("--password", default=PASSWORD)
    p.add_argument("--log-level", default=LOG_LEVEL)
    sub = p.add_subparsers(dest="command")

    sub.add_parser("list", help="show subjects and tasks")
    s = sub.add_parser("add-subject")
    s.add_argument("name")
    s = sub.add_parser("add-task")
    s.add_argument("name")
    s.add_argument("--subject", required=True)
    s = sub.add_parser("edit")
    s.add_argument("task_id")
    s.add_argument("--name", default="")
    s.add_argument("--subject", default="")
    for cmd in ("done", "undo", "delete"):
        s = sub.add_parser(cmd)
        s.add_argument("task_id")
    return p


def _run(controller: AppController, args: argparse.Namespace):
    cmd = args.command or "list"
    if cmd == "add-subject":
        return controller.add_subject(args.name)
    if cmd == "add-task":
        return controller.add_task(args.name, args.subject)
    if cmd == "edit":
        return controller.edit_task(args.task_id, args.name, args.subject)
    if cmd == "done":
        return controller.toggle_completion(args.task_id, True)
    if cmd == "undo":
        return controller.toggle_completion(args.task_id, False)
    if cmd == "delete":
        return controller.delete_task(args.task_id)
    return None


def _line(task: Task) -> str:
    mark = "x" if task.completed else " "
    subject = f" [{task.subject.name}]" if task.subject else ""
    return f"  [{mark}] {task.name}{subject}  ({task.id})"


def render(controller: AppController) -> str:
    out = []
    if controller.subjects:
        out.append("Subjects: " + ", ".join(f"{s.name} {s.color} ({s.id})" for s in controller.subjects))
    else:
        out.append("No subjects yet")
    pending = controller.pending_tasks
    completed = controller.completed_tasks
    if pending:
        out.append("Pending Tasks")
        out.extend(_line(t) for t in pending)
    if completed:
        out.append("Completed Tasks")
        out.extend(_line(t) for t in completed)
    done, total = controller.progress()
    if total:
        out.append(f"{done} of {total} tasks completed")
    return "\n".join(out)


def main(argv=None, client: PocketBaseClient = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if client is None:
        client = PocketBaseClient(args.url)
        try:
            client.login(args.identity, args.password)
        except PBError as e:
            print(f"Login error: {e}")
            return 1

    controller = AppController(client)
    if not controller.load():
        print(f"Load error: {controller.last_error}")
        return 1

    _run(controller, args)
    print(render(controller))
    if controller.last_error is not None:
        print(f"Error: {controller.last_error}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
