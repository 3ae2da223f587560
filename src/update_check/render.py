"""Formatting of update check results for display."""
from __future__ import annotations

from html import escape

from rich.console import Console
from rich.markup import escape as markup_escape

from update_check.models.update_base import PackageType, ReleaseType, TargetPlatform
from update_check.models.update_info import ReleaseInfo, Results

DIALOG_TITLE = "Available Updates"
UNABLE_TO_CHECK_FOR_UPDATES = "Unable to check for updates."
NO_UPDATE_AVAILABLE = "No updates available."
NEW_UPDATE_AVAILABLE = "New updates available: "
DOWNLOAD_THIS_RELEASE_FROM = "Download available in these formats:"
FOR_MORE_INFORMATION_VISIT = "For more information, visit:"
NEW_VERSION = "New version: "
RELEASE_DATE = "Release date: "
TAGS = "Tags: "
TAGS_SEPARATOR = ", "

HTML_NEWLINE = "<br/>"


def _html_link(url: str, text: str) -> str:
    url = escape(url)
    return f'<a href="{url}" title="{url}">{escape(text)}</a>'


def _release_to_html(release: ReleaseInfo, show_tags: bool) -> str:
    html = [
        f"<strong>{escape(release.title)}</strong>",
        HTML_NEWLINE * 2,
        f"{NEW_VERSION}{release.version} ({ReleaseType.to_string(release.type)})",
        HTML_NEWLINE,
        f"{RELEASE_DATE}{escape(release.date)}",
        HTML_NEWLINE,
    ]

    if show_tags:
        if release.tags:
            html.append(TAGS + escape(TAGS_SEPARATOR.join(release.tags)))
        html.append(HTML_NEWLINE)

    html.append(HTML_NEWLINE)

    # "Windows: [MSI] [ZIP] [ZIP]", the full url is the tooltip of each package
    if release.download_links:
        html.append(DOWNLOAD_THIS_RELEASE_FROM)
        html.append(HTML_NEWLINE)
        for platform in release.target_platforms:
            html.append('<div style="text-indent: 40px;">')
            html.append(f"{TargetPlatform.to_string(platform)}:")
            for link in release.download_links:
                package = PackageType.to_string(link.package_type)
                html.append(f" [{_html_link(link.url, package)}]")
            html.append("</div>")
        html.append(HTML_NEWLINE)

    if release.info_links:
        html.append(FOR_MORE_INFORMATION_VISIT)
        html.append("<ul>")
        for link in release.info_links:
            html.append(f"<li>{_html_link(link.url, link.page_description)}</li>")
        html.append("</ul>")

    return "".join(html)


def results_to_html(results: Results, show_tags: bool = False) -> str:
    """Render results as html for a rich text widget."""
    if not results.was_check_successful:
        return (
            f"{UNABLE_TO_CHECK_FOR_UPDATES}{HTML_NEWLINE}"
            f"{escape(results.error_message)}"
        )

    update_info = results.update_info
    if not update_info.is_update_available:
        return f"{NO_UPDATE_AVAILABLE}{HTML_NEWLINE}"

    return "".join(
        [
            NEW_UPDATE_AVAILABLE,
            HTML_NEWLINE * 2,
            *(_release_to_html(r, show_tags) for r in update_info.releases),
        ]
    )


def print_results(
    results: Results, show_tags: bool = False, console: Console | None = None
):
    """Print results to a rich console."""
    console = console or Console()
    cp = console.print

    if not results.was_check_successful:
        cp(f"❌  {UNABLE_TO_CHECK_FOR_UPDATES}")
        cp(markup_escape(results.error_message), style="red")
        return

    update_info = results.update_info
    if not update_info.is_update_available:
        cp(f"✅  {NO_UPDATE_AVAILABLE}")
        return

    cp(f"[bold]{DIALOG_TITLE}[/bold]")
    for release in update_info.releases:
        cp()
        cp(f"[bold cyan]{markup_escape(release.title)}[/bold cyan]")
        cp(f"{NEW_VERSION}{release.version} ({ReleaseType.to_string(release.type)})")
        cp(f"{RELEASE_DATE}{markup_escape(release.date)}")
        if show_tags and release.tags:
            cp(TAGS + markup_escape(TAGS_SEPARATOR.join(release.tags)))

        if release.download_links:
            cp(DOWNLOAD_THIS_RELEASE_FROM)
            for platform in release.target_platforms:
                packages = " ".join(
                    f"[link={link.url}]\\[{PackageType.to_string(link.package_type)}][/link]"
                    for link in release.download_links
                )
                cp(f"    {TargetPlatform.to_string(platform)}: {packages}")

        if release.info_links:
            cp(FOR_MORE_INFORMATION_VISIT)
            for link in release.info_links:
                cp(f"  • [link={link.url}]{markup_escape(link.page_description)}[/link]")
