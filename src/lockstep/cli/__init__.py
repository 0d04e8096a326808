"""lockstep command line interface."""
