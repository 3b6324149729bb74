"""Rich-markup builders for every view.

All functions are pure: they read ``AppState`` and return markup strings, so
they can be tested without mounting a widget. User-supplied text is escaped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from distillery.core.state import EditingAction, GeneratingStory, LoadingPr, LoadingPrList
from distillery.domain.models import CiStatus, ReviewAction, Role, Significance

if TYPE_CHECKING:
    from distillery.core.state import AppState, Mode
    from distillery.domain.models import DiffBlock, Feature, PrListItem, Story

RULE = "─" * 70
HEAVY_RULE = "━" * 70
PROGRESS_BAR_WIDTH = 28
SIDEBAR_TITLE_WIDTH = 20
PICKER_TITLE_WIDTH = 50
REPO_NAME_WIDTH = 40
REPO_DESCRIPTION_WIDTH = 60
ACTION_PREVIEW_LINES = 5

_ROLE_COLORS = {
    Role.ROOT: "magenta",
    Role.DOWNSTREAM: "blue",
    Role.SUPPORTING: "dim",
}

_CI_COLORS = {
    CiStatus.SUCCESS: "green",
    CiStatus.FAILURE: "red",
    CiStatus.PENDING: "yellow",
    CiStatus.UNKNOWN: "dim",
}

_ACTION_COLORS = {
    ReviewAction.REQUEST_CHANGES: "red",
    ReviewAction.CLARIFICATION_QUESTIONS: "blue",
    ReviewAction.NEXT_PR: "green",
}


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(width - 1, 0)] + "…"


def colorize_diff_line(line: str, *, dim: bool = False) -> str:
    """Colorize a single diff line with Rich markup."""
    text = escape(line)
    if dim:
        return f"[dim]{text}[/dim]"
    if line.startswith("+") and not line.startswith("+++"):
        return f"[green]{text}[/green]"
    if line.startswith("-") and not line.startswith("---"):
        return f"[red]{text}[/red]"
    if line.startswith("@@"):
        return f"[cyan]{text}[/cyan]"
    return f"[dim]{text}[/dim]"


# --------------------------------------------------------------------------- #
# Header / hints / status                                                     #
# --------------------------------------------------------------------------- #


def render_header(state: AppState) -> str:
    if state.pr is None:
        return "[bold cyan]Distillery[/]"
    pr = state.pr
    return (
        f"[bold cyan]Distillery[/] [dim]│[/] {escape(pr.reference)}\n"
        f"[yellow]{escape(pr.title)}[/]"
    )


def render_hints(hints: list[tuple[str, str]]) -> str:
    """Render (key, description) pairs to Rich markup."""
    parts = [f"[bold yellow]{escape(key)}[/] {escape(desc)}" for key, desc in hints if key]
    return " " + " [dim]│[/] ".join(parts)


def render_status(state: AppState) -> str:
    return f"[yellow]{escape(state.status)}[/]" if state.status else ""


# --------------------------------------------------------------------------- #
# Loading / error                                                             #
# --------------------------------------------------------------------------- #

_LOADING_MESSAGES: dict[type, str] = {
    LoadingPrList: "Fetching PR list...",
    LoadingPr: "Fetching PR from GitHub...",
    GeneratingStory: "Generating story with AI...",
}


def loading_message(mode: Mode) -> str:
    return _LOADING_MESSAGES.get(type(mode), "Fetching repositories...")


def render_error(message: str) -> str:
    return f"\n[bold red]Error: {escape(message)}[/]"


# --------------------------------------------------------------------------- #
# Sidebar                                                                     #
# --------------------------------------------------------------------------- #


def _progress_bar(viewed: int, total: int) -> str:
    filled = (viewed * PROGRESS_BAR_WIDTH) // total if total else 0
    return f"[green]{'█' * filled}[/][dim]{'░' * (PROGRESS_BAR_WIDTH - filled)}[/]"


def render_sidebar(state: AppState) -> str:
    viewed, total = state.total_progress()
    percent = (viewed * 100) // total if total else 0
    lines = [
        f"[bold cyan]PROGRESS[/] {viewed}/{total} ({percent}%)",
        "",
        _progress_bar(viewed, total),
        "",
        f"[dim]{'─' * 30}[/]",
        "",
    ]
    if state.story is None:
        return "\n".join(lines)

    for index, feature in enumerate(state.story.narrative):
        selected = index == state.selected_feature
        feature_viewed, feature_total = state.feature_progress(index)
        done = feature_total > 0 and feature_viewed == feature_total
        title = escape(truncate(feature.title, SIDEBAR_TITLE_WIDTH))
        if selected:
            lines.append(f"[cyan]▶ [/][bold]{title}[/]")
        elif done:
            lines.append(f"[green]✓ [/][dim]{title}[/]")
        else:
            lines.append(f"  {title}")
        progress_style = "green" if done else "dim"
        lines.append(f"  [{progress_style}]{feature_viewed}/{feature_total} diffs[/]")
        if selected:
            lines.extend(_sidebar_diffs(state, index, feature))
        lines.append("")
    return "\n".join(lines)


def _sidebar_diffs(state: AppState, feature_index: int, feature: Feature) -> list[str]:
    lines = []
    for index, block in enumerate(feature.diff_blocks):
        selected = index == state.selected_diff
        viewed = state.is_diff_viewed(feature_index, index)
        if selected:
            marker = "[green]→ [/]" if viewed else "[yellow]→ [/]"
        elif viewed:
            marker = "[green]✓ [/]"
        else:
            marker = "  "
        if block.significance is Significance.KEY:
            badge = "[yellow]★[/]"
        elif block.significance is Significance.NOISE:
            badge = "[dim]·[/]"
        else:
            badge = " "
        label = escape(truncate(block.label, SIDEBAR_TITLE_WIDTH))
        if block.significance is Significance.NOISE or (viewed and not selected):
            label = f"[dim]{label}[/]"
        elif selected:
            label = f"[yellow]{label}[/]"
        lines.append(f"  {marker}{badge} {label}")
    return lines


# --------------------------------------------------------------------------- #
# Document                                                                    #
# --------------------------------------------------------------------------- #


def render_document(state: AppState) -> list[str]:
    """The scrollable review document, one markup string per line."""
    story = state.story
    if story is None:
        return []
    lines = _summary_lines(story)
    for index, feature in enumerate(story.narrative):
        lines.extend(_feature_lines(state, index, feature))
    if story.open_questions:
        lines.append("[bold yellow]OPEN QUESTIONS[/]")
        lines.extend(f"[yellow]•[/] {escape(question)}" for question in story.open_questions)
        lines.extend(["", f"[dim]{RULE}[/]", ""])
    lines.extend(render_action_panel(state))
    return lines


def _summary_lines(story: Story) -> list[str]:
    lines = [
        "[bold magenta]SUMMARY[/]",
        escape(story.summary),
        "",
        f"[dim]Files: {story.data.files_touched} │ "
        f"+{story.data.additions} -{story.data.deletions}[/]",
        "",
        f"[yellow]{HEAVY_RULE}[/]",
        f"[bold yellow]⚡ FOCUS:[/] [bold]{escape(story.focus.key_change)}[/]",
    ]
    if story.focus.review_these:
        lines.append(f"[cyan]👁 Review:[/] {escape(' │ '.join(story.focus.review_these))}")
    if story.focus.skim_these:
        lines.append(f"[dim]⏭ Skim: {escape(' │ '.join(story.focus.skim_these))}[/]")
    lines.extend([f"[yellow]{HEAVY_RULE}[/]", "", f"[dim]{RULE}[/]", ""])
    return lines


def _bullets(heading: str, color: str, items: list[str]) -> list[str]:
    if not items:
        return []
    return [f"   [bold {color}]{heading}:[/]"] + [
        f"   [{color}]•[/] {escape(item)}" for item in items
    ]


def _feature_lines(state: AppState, index: int, feature: Feature) -> list[str]:
    selected = index == state.selected_feature
    marker = "[cyan]▶ [/]" if selected else "  "
    title = f"[bold]{escape(feature.title)}[/]" if selected else escape(feature.title)
    lines = [
        f"{marker}[bold cyan]FEATURE {index + 1}:[/] {title}",
        f"   [dim]{escape(feature.why)}[/]",
        "",
    ]
    lines.extend(_bullets("Changes", "green", feature.changes))
    lines.extend(_bullets("Risks", "red", feature.risks))
    lines.extend(_bullets("Tests", "blue", feature.tests))
    lines.append("")
    for diff_index, block in enumerate(feature.diff_blocks):
        lines.extend(
            _diff_block_lines(
                block,
                selected=selected and diff_index == state.selected_diff,
                viewed=state.is_diff_viewed(index, diff_index),
            )
        )
    lines.extend([f"[dim]{RULE}[/]", ""])
    return lines


def _diff_block_lines(block: DiffBlock, *, selected: bool, viewed: bool) -> list[str]:
    noise = block.significance is Significance.NOISE
    role_color = "dim" if noise else _ROLE_COLORS[block.role]
    if block.significance is Significance.KEY:
        badge = "[bold yellow]★ KEY[/] "
    elif noise:
        badge = "[dim]· noise[/] "
    else:
        badge = ""
    label_style = "dim" if noise else f"bold {role_color}"
    selection = "[yellow]>> [/]" if selected else "   "
    viewed_marker = "[green] ✓[/]" if viewed else ""
    role_tag = escape(f"[{block.role.value}]")
    context = escape(block.context)
    why = f"[dim]WHY: {context}[/]" if noise else f"[yellow]WHY:[/] {context}"
    lines = [
        f"{selection}[dim]┌─[/] {badge}[{label_style}]{escape(block.label)}[/]"
        f" [{role_color}]{role_tag}[/]{viewed_marker}",
        f"   [dim]│[/] {why}",
    ]
    for hunk in block.hunks:
        lines.append(f"   [dim]│[/] [{'dim' if noise else 'cyan'}]{escape(hunk.header)}[/]")
        lines.extend(
            f"   [dim]│[/] {colorize_diff_line(line, dim=noise)}" for line in hunk.lines.splitlines()
        )
    lines.extend(["   [dim]└─[/]", ""])
    return lines


def render_action_panel(state: AppState) -> list[str]:
    """The three review actions, with the selected draft expanded."""
    selected = state.selected_action
    tabs = " ".join(
        f"[bold reverse {_ACTION_COLORS[action]}] {number}: {action.title} [/]"
        if action is selected
        else f"[dim] {number}: {action.title} [/]"
        for number, action in enumerate(ReviewAction, start=1)
    )
    color = _ACTION_COLORS[selected]
    lines = [
        "[bold cyan]ACTIONS[/] [dim](1-3 select, Enter to edit)[/]",
        tabs,
        "",
        f"[{color}]▶ [/][bold {color}]{selected.title}[/]",
    ]
    text = state.current_action_text()
    if isinstance(state.mode, EditingAction):
        lines.extend(f"  {line}" for line in _with_cursor(text, state.cursor_pos).split("\n"))
        return lines

    draft = text.splitlines()
    lines.extend(f"  {escape(line)}" for line in draft[:ACTION_PREVIEW_LINES])
    if len(draft) > ACTION_PREVIEW_LINES:
        lines.append("  [dim]... (press Enter to edit full text)[/]")
    if not draft:
        lines.append("  [dim](empty)[/]")
    return lines


def _with_cursor(text: str, cursor: int) -> str:
    """Escape ``text`` and mark the code point at ``cursor`` with reverse video."""
    cursor = min(max(cursor, 0), len(text))
    under = text[cursor : cursor + 1]
    if under in ("", "\n"):
        marked = "[reverse] [/reverse]" + under
    else:
        marked = f"[reverse]{escape(under)}[/reverse]"
    return escape(text[:cursor]) + marked + escape(text[cursor + 1 :])


# --------------------------------------------------------------------------- #
# Picker / repo selector                                                      #
# --------------------------------------------------------------------------- #


def _pr_section(pr: PrListItem) -> str:
    if pr.is_draft:
        return "DRAFTS"
    return "REVIEW REQUESTED" if pr.review_requested else "OPEN"


_SECTION_COLORS = {"REVIEW REQUESTED": "yellow", "DRAFTS": "dim", "OPEN": "bold"}


def render_picker(state: AppState) -> str:
    repo = "/".join(state.current_repo) if state.current_repo else "Unknown"
    lines = [f"[bold cyan]SELECT PR[/] [dim]│[/] {escape(repo)}", ""]
    if not state.pr_list:
        lines.append("[dim]No open PRs found[/]")
        return "\n".join(lines)

    last_section: str | None = None
    for index, pr in enumerate(state.pr_list):
        section = _pr_section(pr)
        if section != last_section:
            if last_section is not None:
                lines.append("")
            lines.append(f"[{_SECTION_COLORS[section]}]── {section} ──[/]")
            last_section = section
        selected = index == state.picker_selected
        marker = "[cyan]▶ [/]" if selected else "  "
        title = escape(truncate(pr.title, PICKER_TITLE_WIDTH))
        if selected:
            title = f"[bold]{title}[/]"
        elif pr.is_draft:
            title = f"[dim]{title}[/]"
        ci = f"[{_CI_COLORS[pr.ci_status]}]{pr.ci_status.symbol}[/]"
        lines.append(f"{marker}{ci} [blue]#{pr.number:<5}[/]{title}")
        lines.append(
            f"     [dim]{escape(pr.author)} │[/] [green]+{pr.additions}[/][dim]/[/]"
            f"[red]-{pr.deletions}[/] [dim]│[/] [magenta]{escape(pr.head_branch)}[/]"
        )
    return "\n".join(lines)


def render_repo_selector(state: AppState) -> str:
    lines = ["[bold cyan]SELECT REPOSITORY[/]", ""]
    if not state.repo_list:
        lines.append("[dim]No repositories found[/]")
        return "\n".join(lines)
    for index, repo in enumerate(state.repo_list):
        selected = index == state.repo_selected
        marker = "[cyan]▶ [/]" if selected else "  "
        name = escape(truncate(repo.full_name, REPO_NAME_WIDTH))
        if selected:
            name = f"[bold]{name}[/]"
        flags = ""
        if repo.is_private:
            flags += " [yellow]🔒[/]"
        if repo.is_fork:
            flags += " [dim]⑂[/]"
        lines.append(f"{marker}{name}{flags}")
        if repo.description:
            lines.append(f"   [dim]{escape(truncate(repo.description, REPO_DESCRIPTION_WIDTH))}[/]")
    return "\n".join(lines)
