"""SchoolCMS command line interface."""
