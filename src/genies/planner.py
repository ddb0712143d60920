"""
genies.planner - Scaffold Planning
==================================

Decides, for each requested component, where its file goes and whether it
is written at all. Planning runs once per component name and ends in one
of three dispositions:

    start
      → baseDirCheck        components root missing? create or abort batch
      → subdirChoice        --path, components root, or a subdirectory alias
      → targetDirCheck      does the effective directory exist yet?
      → nameCollisionLocal  file exists there? overwrite or skip
      → nameCollisionCrossDir  same file name in another known directory?
      → finalDirCheck       create the effective directory or abort
      → create | skip | abort

The base directory check runs once per batch (``ensure_base_directory``);
declining it aborts every component. The remaining steps run in
``plan_component`` for one name at a time, so a skip or abort only affects
that name.

All questions go through a ``PromptProvider``; with ``--yes`` the
unconditional provider answers them without blocking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.markup import escape

from genies import logger
from genies.exceptions import ScaffoldIOError
from genies.models import Disposition, ScaffoldPlan
from genies.naming import to_file_name, to_symbol_name
from genies.prompts import Choice, UnconditionalPrompter
from genies.writer import create_jinja_env, render_component, write_component


if TYPE_CHECKING:
    from pathlib import Path

    from genies.models import ResolvedConfig, ScaffoldRequest
    from genies.prompts import PromptProvider


# Value of the "components root" option of the directory question
ROOT_CHOICE = "."


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class BatchResult:
    """
    Outcome of scaffolding every component of one request.

    Attributes
    ----------
    plans : list[ScaffoldPlan]
        One plan per component that got past planning.

    written : list[Path]
        Files that were written.

    errors : list[ScaffoldIOError]
        Per-component filesystem failures; sibling components continue.

    aborted : bool
        True when the components root was missing and its creation was
        declined; no component was planned.
    """

    plans: list[ScaffoldPlan] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    errors: list[ScaffoldIOError] = field(default_factory=list)
    aborted: bool = False

    @property
    def success(self) -> bool:
        return not self.errors

    def by_disposition(self, disposition: Disposition) -> list[ScaffoldPlan]:
        return [p for p in self.plans if p.disposition is disposition]


# =============================================================================
# Directory Checks
# =============================================================================

def make_directory(directory: Path) -> None:
    """
    Create ``directory`` and any missing parents.

    Raises
    ------
    ScaffoldIOError
        If the directory cannot be created.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ScaffoldIOError(directory, e) from e


def ensure_base_directory(resolved: ResolvedConfig, prompter: PromptProvider) -> bool:
    """
    Make sure the components root exists, offering to create it.

    Returns
    -------
    bool
        False when the root is missing and the user declined creating it.

    Raises
    ------
    ScaffoldIOError
        If creating the root fails.
    """
    base_dir = resolved.components_dir
    if base_dir.is_dir():
        return True

    if not prompter.confirm(
        f"The base directory {resolved.relative(base_dir)} does not exist. "
        "Would you like to create it?",
        default=True,
    ):
        return False

    make_directory(base_dir)
    return True


def choose_target_directory(
    resolved: ResolvedConfig,
    request: ScaffoldRequest,
    prompter: PromptProvider,
) -> Path:
    """
    Effective directory for a component.

    An explicit ``--path`` wins. Otherwise, when subdirectory aliases are
    configured, the user picks the components root or one of them; the
    root is the default.
    """
    if request.path is not None:
        return (resolved.cwd / request.path).resolve()

    alias_dirs = resolved.alias_dirs
    if not alias_dirs:
        return resolved.components_dir

    choices = [
        Choice(f"{resolved.relative(resolved.components_dir)} (components root)", ROOT_CHOICE),
        *(Choice(alias, alias) for alias in alias_dirs),
    ]
    answer = prompter.select(
        "Select a directory to add the component to:",
        choices,
        default=ROOT_CHOICE,
    )
    return alias_dirs.get(answer, resolved.components_dir)


def find_conflicts(file_name: str, target_dir: Path, resolved: ResolvedConfig) -> list[Path]:
    """
    Files named ``file_name`` in known directories other than ``target_dir``.

    Known directories are the components root and every alias directory.
    """
    conflicts: list[Path] = []
    for directory in resolved.known_dirs:
        if directory == target_dir:
            continue
        candidate = directory / file_name
        if candidate.is_file() and candidate not in conflicts:
            conflicts.append(candidate)
    return conflicts


# =============================================================================
# Planning
# =============================================================================

def plan_component(
    name: str,
    resolved: ResolvedConfig,
    request: ScaffoldRequest,
    prompter: PromptProvider,
) -> ScaffoldPlan:
    """
    Plan a single component.

    Parameters
    ----------
    name : str
        Component name as typed (non-empty).

    resolved : ResolvedConfig
        Configuration with resolved directories; the components root is
        expected to exist (see ``ensure_base_directory``).

    request : ScaffoldRequest
        Flags of the current invocation.

    prompter : PromptProvider
        Answers overwrite, duplicate and directory questions.

    Returns
    -------
    ScaffoldPlan
        The decision. With disposition ``create`` the target directory
        exists when this returns.

    Raises
    ------
    ScaffoldIOError
        If creating the target directory fails.
    """
    config = resolved.config
    target_dir = choose_target_directory(resolved, request, prompter)

    plan = ScaffoldPlan(
        component=name,
        directory=target_dir,
        file_name=f"{to_file_name(name, config.style)}.{config.extension}",
        symbol_name=to_symbol_name(name),
        disposition=Disposition.CREATE,
    )
    location = resolved.relative(target_dir)

    target_exists = target_dir.is_dir()

    if target_exists and plan.file_path.exists():
        plan.overwrites = True
        if not request.overwrite and not prompter.confirm(
            f"Component {plan.file_name} already exists in {location}. "
            "Would you like to overwrite?",
            default=False,
        ):
            plan.disposition = Disposition.SKIP
            return plan

    plan.conflicts = find_conflicts(plan.file_name, target_dir, resolved)
    if plan.conflicts:
        listing = "\n".join(f"  {resolved.relative(p)}" for p in plan.conflicts)
        if not prompter.confirm(
            f"A component named {plan.file_name} already exists in the following "
            f"directories:\n{listing}\nDo you still want to create it in {location}?",
            default=True,
        ):
            plan.disposition = Disposition.SKIP
            return plan

    if not target_exists:
        if not prompter.confirm(
            f"The directory {location} does not exist. Would you like to create it?",
            default=True,
        ):
            plan.disposition = Disposition.ABORT
            return plan
        make_directory(target_dir)

    return plan


def report_plan(plan: ScaffoldPlan, resolved: ResolvedConfig) -> None:
    """Print the informational message for a skipped or aborted plan."""
    file_name = logger.highlight(plan.file_name)
    location = logger.path_markup(resolved.relative(plan.directory))

    if plan.disposition is Disposition.ABORT:
        logger.warn(f"Directory {location} does not exist. Skipped {file_name}.")
    elif plan.disposition is Disposition.SKIP and plan.conflicts:
        logger.info(f"Skipped creating {file_name} in {location}.")
    elif plan.disposition is Disposition.SKIP:
        logger.info(
            f"Skipped {file_name}. To overwrite, run with the "
            "[green]--overwrite[/] flag."
        )


def run_batch(
    request: ScaffoldRequest,
    resolved: ResolvedConfig,
    prompter: PromptProvider,
    *,
    verbose: bool = True,
) -> BatchResult:
    """
    Plan and write every component of a request, one after another.

    Parameters
    ----------
    request : ScaffoldRequest
        Component names and flags.

    resolved : ResolvedConfig
        Configuration with resolved directories.

    prompter : PromptProvider
        Answers every question of the batch. Replaced by an
        ``UnconditionalPrompter`` when ``request.yes`` is set.

    verbose : bool, default=True
        If True, report each component on the console.

    Returns
    -------
    BatchResult
        Plans, written files and per-component errors.

    Raises
    ------
    ScaffoldIOError
        If creating the components root fails; no component can be
        written in that case.
    """
    result = BatchResult()
    if request.yes:
        prompter = UnconditionalPrompter()

    if not ensure_base_directory(resolved, prompter):
        result.aborted = True
        if verbose:
            location = logger.path_markup(resolved.relative(resolved.components_dir))
            logger.warn(f"Directory {location} does not exist. Exiting.")
        return result

    env = create_jinja_env()

    for name in request.components:
        try:
            plan = plan_component(name, resolved, request, prompter)
            result.plans.append(plan)

            if plan.disposition is not Disposition.CREATE:
                if verbose:
                    report_plan(plan, resolved)
                continue

            content = render_component(plan.symbol_name, plan.extension, env)
            result.written.append(write_component(plan, content))

            if verbose:
                logger.success(
                    f"Component {logger.highlight(plan.file_name)} "
                    f"{'overwritten' if plan.overwrites else 'created'} successfully in "
                    f"{logger.path_markup(resolved.relative(plan.directory))}."
                )

        except ScaffoldIOError as e:
            result.errors.append(e)
            if verbose:
                logger.error(escape(str(e)))

    return result
