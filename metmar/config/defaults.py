"""Default coastal areas served by the Meteo-France marine endpoint."""

DEFAULT_AREA_IDS: list[str] = [str(i) for i in range(1, 10)]
