"""Pure task-list decoding - no I/O dependencies."""

from .models import TaskItem


def title_text(page: dict) -> str:
    """
    Plain text of a Notion page's title property.

    A database has exactly one property of type "title"; its value is a list
    of rich-text segments that are joined together.
    """
    for prop in page.get("properties", {}).values():
        if prop.get("type") == "title":
            return "".join(seg.get("plain_text", "") for seg in prop.get("title", []))
    return ""


def parse_task_results(results: list[dict]) -> list[TaskItem]:
    """
    Convert database query results into task items.

    Entries whose title is empty are skipped. Pure function - no I/O.
    """
    tasks = []
    for page in results:
        title = title_text(page).strip()
        if not title:
            continue
        tasks.append(TaskItem(id=page["id"], title=title))
    return tasks

