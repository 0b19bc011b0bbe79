"""HTTP adapter exposing hot-seat matches to a front end."""
