"""Publish command: ordered, tag-aware publishing of every package."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from lockstep.commands.base import CommandContext, SyncCommand
from lockstep.errors import MissingTagError, PublishError


def resolve_dist_tag(tag: str, branch: str, latest_tag: str = "latest") -> str:
    """Prefix a distribution tag with the branch name.

    Only the latest tag is left alone; the branch itself is never special-cased.

    Args:
        tag: Requested distribution tag.
        branch: Current branch name.
        latest_tag: Tag exempt from prefixing.

    Returns:
        Final distribution tag.
    """
    if tag == latest_tag:
        return tag
    return f"{branch}-{tag}"


@dataclass
class PublishOptions:
    """Options for publish command."""

    tag: str = ""
    access: str | None = None
    dry_run: bool = False
    git_push: bool = False
    on_publish: Callable[[str], None] | None = None


@dataclass
class PublishResult:
    """Result of publish command.

    Attributes:
        order: Package names in publish order.
        dist_tag: Resolved distribution tag.
        branch: Branch the tag was resolved against.
        published: Packages handed to the publisher, in order.
        pushed: Whether commits and tags were pushed.
    """

    order: list[str]
    dist_tag: str
    branch: str
    access: str
    dry_run: bool = False
    published: list[str] = field(default_factory=list)
    pushed: bool = False


class PublishCommand(SyncCommand[PublishResult]):
    """Publish every package, dependencies first."""

    def __init__(self, context: CommandContext, options: PublishOptions | None = None) -> None:
        super().__init__(context)
        self.options = options or PublishOptions()

    @property
    def access(self) -> str:
        return self.options.access or self.config.publish.access

    def execute(self) -> PublishResult:
        """Execute the publish command.

        Raises:
            MissingTagError: If no tag was given. Nothing has run at that point.
        """
        if not self.options.tag:
            raise MissingTagError()

        workspace = self.context.build_workspace()
        order = workspace.publish_order()

        branch = self.context.vcs.current_branch()
        dist_tag = resolve_dist_tag(self.options.tag, branch, self.config.publish.latest_tag)

        result = PublishResult(
            order=order,
            dist_tag=dist_tag,
            branch=branch,
            access=self.access,
            dry_run=self.options.dry_run,
        )

        for name in order:
            pkg = workspace.get_package(name)
            if self.options.on_publish:
                self.options.on_publish(name)
            try:
                self.context.publisher.publish(
                    pkg.directory,
                    access=self.access,
                    dist_tag=dist_tag,
                    dry_run=self.options.dry_run,
                )
            except PublishError as e:
                if e.package_name:
                    raise
                raise PublishError(e.message, package_name=name) from e
            result.published.append(name)

        if self.options.git_push and not self.options.dry_run:
            self.context.vcs.push_with_tags()
            result.pushed = True

        return result


def publish(
    context: CommandContext,
    *,
    tag: str,
    access: str | None = None,
    dry_run: bool = False,
    git_push: bool = False,
) -> PublishResult:
    """Convenience function to publish packages."""
    options = PublishOptions(tag=tag, access=access, dry_run=dry_run, git_push=git_push)
    return PublishCommand(context, options).execute()
