# followyourflush/camera/visualization.py
"""
Static map export of a journey. Each element of the journey sits on its own
toggleable layer, mirroring what the live surface shows.
"""
import logging
from typing import Iterable, List, Optional, Sequence

import folium
from shapely.geometry import mapping

from ..catchment.data_models import CatchmentPolygon, Facility
from ..path_planner.data_models import Coordinate, OutfallSegment
from .constants import CameraConstants


class JourneyMapVisualizer:
    """Creates interactive Folium maps of catchments, the walking route and outfalls."""

    def create_journey_map(
        self,
        catchments: Iterable[CatchmentPolygon] = (),
        facility: Optional[Facility] = None,
        display_path: Optional[Sequence[Coordinate]] = None,
        outfalls: Iterable[OutfallSegment] = ()
    ) -> folium.Map:
        lon, lat = CameraConstants.MAP_CENTER
        journey_map = folium.Map(location=[lat, lon], zoom_start=CameraConstants.MAP_ZOOM, tiles="CartoDB positron")

        catchment_group = folium.FeatureGroup(name="Catchment Areas", show=True).add_to(journey_map)
        for catchment in catchments:
            self._create_catchment_visual(catchment).add_to(catchment_group)

        if facility:
            plant_group = folium.FeatureGroup(name="Treatment Plant", show=True).add_to(journey_map)
            folium.Marker(
                location=[facility.lat, facility.lon],
                popup=f"<b>{facility.label}</b>",
                tooltip=facility.label,
                icon=folium.Icon(color='red', icon='tint', prefix='fa')
            ).add_to(plant_group)

        if display_path:
            route_group = folium.FeatureGroup(name="Flush Route", show=True).add_to(journey_map)
            folium.PolyLine(locations=self._to_locations(display_path), color='#1b72ff', weight=4,
                            tooltip="Route to the treatment plant").add_to(route_group)
            journey_map.fit_bounds(self._to_locations(display_path))

        outfalls = list(outfalls)
        if outfalls:
            outfall_group = folium.FeatureGroup(name="Outfall Pipes", show=True).add_to(journey_map)
            for segment in outfalls:
                folium.PolyLine(locations=self._to_locations(segment.coordinates), color='#0099ff', weight=4,
                                dash_array='6, 6', tooltip=f"{segment.facility_name} outfall").add_to(outfall_group)

        folium.LayerControl(collapsed=False).add_to(journey_map)
        logging.info("Journey map created.")
        return journey_map

    def _create_catchment_visual(self, catchment: CatchmentPolygon) -> folium.GeoJson:
        return folium.GeoJson(
            mapping(catchment.geometry),
            style_function=lambda _: {'fillColor': '#00ff00', 'color': '#00aa00', 'weight': 1, 'fillOpacity': 0.25},
            tooltip=f"Serviced by {catchment.name}"
        )

    @staticmethod
    def _to_locations(coords: Sequence[Coordinate]) -> List[List[float]]:
        # Folium wants [lat, lon]
        return [[c[1], c[0]] for c in coords]
