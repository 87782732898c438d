"""
MapWidget implementation on top of folium.

folium renders static Leaflet HTML, so the widget keeps its own list of
markers and builds a fresh folium.Map on every render. Clicks arrive from
whatever hosts the page and are fed in through dispatch_click.
"""

import logging
from typing import List, Optional

import folium

from client.ports import ClickHandler
from domain.models import Coordinates

logger = logging.getLogger(__name__)

OSM_TILES = "OpenStreetMap"
POPUP_MAX_WIDTH = 250
POPUP_MIN_WIDTH = 100


class FoliumMarker:
    """Marker handle returned by FoliumMapWidget.add_marker."""

    def __init__(
        self,
        widget: "FoliumMapWidget",
        position: Coordinates,
        popup: str,
        popup_class: str,
    ):
        self._widget = widget
        self.position = position
        self.popup = popup
        self.popup_class = popup_class

    def open_popup(self) -> None:
        self._widget.focused_marker = self


class FoliumMapWidget:
    """
    Map widget that renders to an HTML document with folium.

    Usage:
        >>> widget = FoliumMapWidget(Coordinates(latitude=51.5, longitude=-0.1))
        >>> widget.add_marker(
        ...     Coordinates(latitude=51.5, longitude=-0.1), "Running", "running-popup"
        ... )  # doctest: +ELLIPSIS
        <client.folium_map.FoliumMarker object at ...>
        >>> widget.save("workouts.html")  # doctest: +SKIP
    """

    def __init__(self, center: Coordinates, zoom: int = 13):
        self.center = center
        self.zoom = zoom
        self.focused_marker: Optional[FoliumMarker] = None
        self._markers: List[FoliumMarker] = []
        self._click_handlers: List[ClickHandler] = []

    @property
    def marker_count(self) -> int:
        return len(self._markers)

    # -------------------------------------------------------------------------
    # MapWidget
    # -------------------------------------------------------------------------

    def set_view(self, center: Coordinates, zoom: int) -> None:
        self.center = center
        self.zoom = zoom

    def add_marker(
        self,
        position: Coordinates,
        popup: str,
        popup_class: str,
    ) -> FoliumMarker:
        marker = FoliumMarker(self, position, popup, popup_class)
        self._markers.append(marker)
        return marker

    def remove_marker(self, handle: FoliumMarker) -> None:
        if handle in self._markers:
            self._markers.remove(handle)
        if self.focused_marker is handle:
            self.focused_marker = None

    def on_click(self, handler: ClickHandler) -> None:
        self._click_handlers.append(handler)

    # -------------------------------------------------------------------------
    # Host integration
    # -------------------------------------------------------------------------

    def dispatch_click(self, position: Coordinates) -> None:
        """Forward a click on the rendered map to every registered handler."""
        for handler in self._click_handlers:
            handler(position)

    def render(self) -> folium.Map:
        """Build a folium map with every marker and its popup open."""
        m = folium.Map(
            location=list(self.center.as_pair()),
            zoom_start=self.zoom,
            tiles=OSM_TILES,
        )

        for marker in self._markers:
            folium.Marker(
                list(marker.position.as_pair()),
                popup=folium.Popup(
                    marker.popup,
                    show=True,
                    max_width=POPUP_MAX_WIDTH,
                    min_width=POPUP_MIN_WIDTH,
                    class_name=marker.popup_class,
                ),
                icon=folium.Icon(color="red") if marker is self.focused_marker else None,
            ).add_to(m)

        return m

    def save(self, path: str) -> None:
        """Render and write the map as a standalone HTML page."""
        self.render().save(path)
        logger.info(f"Map with {len(self._markers)} markers written to {path}")
