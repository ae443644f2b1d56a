"""TripMind - AI travel planning: itineraries, locations and safety advisories."""
