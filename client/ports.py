"""
Client-side ports: the map widget, geolocation and user notices.

PresentationSync talks to these Protocols only. FoliumMapWidget,
FixedGeolocation and LoggingNotifier are the shipped implementations;
tests use the fakes in tests/fakes.
"""
from typing import Callable, Protocol

from domain.models import Coordinates

ClickHandler = Callable[[Coordinates], None]


class GeolocationError(Exception):
    """Raised when the current position cannot be determined."""

    pass


class MarkerHandle(Protocol):
    """A marker placed on the map."""

    def open_popup(self) -> None:
        """Show the marker's popup."""
        ...


class MapWidget(Protocol):
    """
    Interactive map.

    Coordinates are passed as Coordinates value objects; widgets convert
    to whatever pair order their library needs.
    """

    def set_view(self, center: Coordinates, zoom: int) -> None:
        """Center the map at ``center`` with the given zoom level."""
        ...

    def add_marker(
        self,
        position: Coordinates,
        popup: str,
        popup_class: str,
    ) -> MarkerHandle:
        """
        Place a marker with a popup that stays open.

        Args:
            position: Where to put the marker
            popup: Popup text
            popup_class: CSS class for the popup (e.g. "running-popup")

        Returns:
            Handle used to re-open the popup or remove the marker
        """
        ...

    def remove_marker(self, handle: MarkerHandle) -> None:
        """Remove a marker previously returned by add_marker."""
        ...

    def on_click(self, handler: ClickHandler) -> None:
        """Register the handler called with the clicked position."""
        ...


class GeolocationProvider(Protocol):
    """One-shot source of the user's position."""

    async def current_position(self) -> Coordinates:
        """
        Get the current position.

        Raises:
            GeolocationError: If the position is unavailable or denied
        """
        ...


class Notifier(Protocol):
    """Shows a short message to the user."""

    def notify(self, message: str) -> None:
        ...
