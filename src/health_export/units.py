"""Unit conversion from base units to the user's display system.

All inputs are in base units (meters, kilograms, Celsius, liters, m/s).
Conversions never raise: out-of-range values are passed through the same
arithmetic as any other value.
"""

from enum import Enum

# Conversion factors
METERS_PER_MILE = 1609.34
FEET_PER_METER = 3.28084
INCHES_PER_METER = 39.3701
POUNDS_PER_KG = 2.20462
GALLONS_PER_LITER = 0.264172
KMH_PER_MS = 3.6
MPH_PER_MS = 2.23694


class UnitPreference(str, Enum):
    """Display unit system."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class UnitConverter:
    """Converts base-unit quantities into the preferred unit system."""

    def __init__(self, preference: UnitPreference = UnitPreference.METRIC) -> None:
        self.preference = UnitPreference(preference)

    @property
    def is_metric(self) -> bool:
        return self.preference == UnitPreference.METRIC

    # Distance

    def convert_distance(self, meters: float) -> float:
        """Convert meters to kilometers or miles."""
        if self.is_metric:
            return meters / 1000
        return meters / METERS_PER_MILE

    def format_distance(self, meters: float) -> str:
        """Format a distance, switching to m/ft below 1000 meters."""
        if meters < 1000:
            if self.is_metric:
                return f"{int(meters)} m"
            return f"{int(meters * FEET_PER_METER)} ft"
        if self.is_metric:
            return f"{self.convert_distance(meters):.1f} km"
        return f"{self.convert_distance(meters):.2f} mi"

    def distance_unit(self) -> str:
        return "km" if self.is_metric else "mi"

    # Weight

    def convert_weight(self, kg: float) -> float:
        if self.is_metric:
            return kg
        return kg * POUNDS_PER_KG

    def format_weight(self, kg: float) -> str:
        return f"{self.convert_weight(kg):.1f} {self.weight_unit()}"

    def weight_unit(self) -> str:
        return "kg" if self.is_metric else "lb"

    # Height

    def convert_height(self, meters: float) -> float:
        """Convert height to meters or decimal feet."""
        if self.is_metric:
            return meters
        return meters * FEET_PER_METER

    def format_height(self, meters: float) -> str:
        """Format height as meters or a feet/inches composite (5'9")."""
        if self.is_metric:
            return f"{meters:.2f} m"
        total_inches = int(round(meters * INCHES_PER_METER))
        feet, inches = divmod(total_inches, 12)
        return f"{feet}'{inches}\""

    def height_unit(self) -> str:
        return "m" if self.is_metric else "ft"

    # Temperature

    def convert_temperature(self, celsius: float) -> float:
        if self.is_metric:
            return celsius
        return celsius * 9 / 5 + 32

    def format_temperature(self, celsius: float) -> str:
        return f"{self.convert_temperature(celsius):.1f}{self.temperature_unit()}"

    def temperature_unit(self) -> str:
        return "°C" if self.is_metric else "°F"

    # Length (body circumference, step length)

    def convert_length(self, meters: float) -> float:
        """Convert meters to centimeters or inches."""
        if self.is_metric:
            return meters * 100
        return meters * INCHES_PER_METER

    def format_length(self, meters: float) -> str:
        return f"{self.convert_length(meters):.1f} {self.length_unit()}"

    def length_unit(self) -> str:
        return "cm" if self.is_metric else "in"

    # Volume

    def convert_volume(self, liters: float) -> float:
        if self.is_metric:
            return liters
        return liters * GALLONS_PER_LITER

    def format_volume(self, liters: float) -> str:
        if self.is_metric:
            return f"{self.convert_volume(liters):.1f} L"
        return f"{self.convert_volume(liters):.2f} gal"

    def volume_unit(self) -> str:
        return "L" if self.is_metric else "gal"

    # Speed

    def convert_speed(self, meters_per_second: float) -> float:
        if self.is_metric:
            return meters_per_second * KMH_PER_MS
        return meters_per_second * MPH_PER_MS

    def format_speed(self, meters_per_second: float) -> str:
        return f"{self.convert_speed(meters_per_second):.1f} {self.speed_unit()}"

    def speed_unit(self) -> str:
        return "km/h" if self.is_metric else "mph"
