"""
Thin Dash shell: layout, component ids and the single callback that relays
UI interactions to the coordinator.
"""
