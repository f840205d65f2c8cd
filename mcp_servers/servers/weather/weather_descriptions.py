GET_TEMPERATURE_DESCRIPTION = """Get the temperature (in celsius) for a specific location.

Looks up the current temperature at the given coordinates from the
Open-Meteo forecast API. When the connected client supports sampling, the
client's model is also asked to write a short poem about the forecast.

Use this tool when:
- The user asks for the current temperature or weather at a place whose
  coordinates are known (or can be inferred, e.g. Berlin is 52.52, 13.41)

Returns:
A short text containing the poem (or a note that sampling was not
available), the temperature in celsius (or "unknown" when the provider had
no data) and the coordinates that were used."""

LATITUDE_DESCRIPTION = "The location latitude"

LONGITUDE_DESCRIPTION = "The location longitude"
