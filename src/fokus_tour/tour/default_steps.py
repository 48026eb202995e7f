"""The editor's built-in first-run tour.

Anchors are Qt object names of the main window's toolbar and sidebar widgets;
``WidgetRectProvider`` resolves them. The welcome screen is a separate dialog,
so the tour starts directly at the toolbar.
"""

from __future__ import annotations

from .models import Side, TourStep
from .registry import TourDefinition

__all__ = ["EDITOR_TOUR_ID", "EDITOR_TOUR_STEPS", "build_editor_tour"]

EDITOR_TOUR_ID = "editor"

EDITOR_TOUR_STEPS = (
    TourStep(
        id="sidebar-toggle",
        anchor="sidebarToggleButton",
        title="Toggle the sidebar",
        body=(
            "The menu button opens and closes the sidebar.\n"
            "Close it when you want to focus on writing."
        ),
    ),
    TourStep(
        id="sidebar",
        anchor="sidebar",
        side=Side.RIGHT,
        title="Articles & Git",
        body="Pick an article and run Git operations (commit, push) from here.",
    ),
    TourStep(
        id="save",
        anchor="saveButton",
        title="Save and status",
        body="Saves the current article. The icon also shows unsaved changes.\n(Ctrl+S)",
    ),
    TourStep(
        id="preview-toggle",
        anchor="previewToggleButton",
        title="Preview",
        body="Switches between the editor and the rendered preview.",
    ),
    TourStep(
        id="theme-toggle",
        anchor="themeToggleButton",
        title="Theme",
        body="Switches between dark and light mode.",
    ),
    TourStep(
        id="settings",
        anchor="settingsButton",
        title="Settings & shortcuts",
        body="Change the repository path or look up keyboard shortcuts.",
    ),
    TourStep(
        id="new-article",
        anchor="newArticleButton",
        title="Let's get started",
        body="Click the new article button to start writing!",
    ),
)


def build_editor_tour() -> TourDefinition:
    return TourDefinition(
        id=EDITOR_TOUR_ID,
        steps=EDITOR_TOUR_STEPS,
        description="First-run walkthrough of the editor toolbar and sidebar",
    )
