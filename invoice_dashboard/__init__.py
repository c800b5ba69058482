"""Invoice dashboard backend: form handlers for the invoice management screen."""
