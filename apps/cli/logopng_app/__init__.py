"""Command line front end for logopng."""
