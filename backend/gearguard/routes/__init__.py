from importlib import import_module

modules = [
    'users',
    'departments',
    'teams',
    'equipment',
    'requests',
    'admin',
    'reports',
]

for m in modules:
    import_module(f'.{m}', __name__)

__all__ = modules
