"""release-spine command line interface."""
