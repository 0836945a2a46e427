"""
Freight UI: back-office list screens for consignments and trip sheets.

This package provides paginated, filtered list screens with a bulk-selection
engine that can select every item matching the current filter without
transferring the full result set.

Subpackages:
- engine: Debounce, page fetching, selection and bulk resolution
- models: Filter criteria, records and selection state
- services: Data access layer (demo and HTTP implementations)
- components: Reflex UI components
- data: Seeded demo fixtures

Main entry points:
- app.main(): Start the development server
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
