from dishka import Provider as DishkaProvider

from pulse.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all Pulse DI providers.

    Dependencies default to the unit-of-work scope; APP-lifetime providers
    declare ``scope=Scope.APP`` explicitly.
    """

    scope = Scope.UOW
