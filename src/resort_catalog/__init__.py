"""Resort catalog service: sanatorium directory with field-level moderation."""
