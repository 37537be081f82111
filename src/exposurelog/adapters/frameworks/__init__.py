"""Framework adapters exposing stored exposures over HTTP."""
