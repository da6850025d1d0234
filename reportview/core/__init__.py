"""reportview core — triggers, remote resources, decoders and formatters."""
