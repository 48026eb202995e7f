"""Qt widgets for the guided tour.

Import ``fokus_tour.components.tour_overlay`` directly; this package does not
import PyQt6 eagerly.
"""
