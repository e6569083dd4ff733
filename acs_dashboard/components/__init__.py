"""
Dashboard components

Each component (clients, projects, audit, ...) is a blueprint plus a service
class that talks to the backend. Services register here so the status API
can report which screens this dashboard serves.
"""


class ComponentRegistry:
    """Service classes by component name"""

    def __init__(self):
        self.services = {}

    def register(self, name, service_class):
        if name in self.services and self.services[name] is not service_class:
            raise ValueError(f'Component {name!r} is already registered')
        self.services[name] = service_class

    def names(self):
        """Registered component names, sorted"""
        return sorted(self.services)


registry = ComponentRegistry()


def register_component(name):
    """Class decorator: `@register_component('clients')` on a service class"""
    def decorator(service_class):
        registry.register(name, service_class)
        return service_class
    return decorator


__all__ = ['ComponentRegistry', 'registry', 'register_component']
