"""HTTP surface of the survey admin console."""
