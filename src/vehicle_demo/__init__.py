"""Car / Truck walkthrough of classy, runnable as ``python -m vehicle_demo.run_demo``."""
