'''Register machinery for components.

There should normally be no need to use these functions directly.
'''

from typing import Callable, Dict, Tuple, Union


def marker(register: Dict[str, Callable],
           ) -> Callable[[Callable], Callable]:
    '''Create a decorator that adds a function to the register.'''
    def mark_function(func: Callable) -> Callable:
        register[func.__name__] = func
        return func
    return mark_function


def getter(register: Dict[str, Callable],
           kind: str,
           ) -> Callable[[str], Callable]:
    '''Create a function retrieving from the register by name.'''
    def get(name: str) -> Callable:
        try:
            return register[name]
        except KeyError:
            raise KeyError(
                f'unknown {kind}: {name}, available: '
                + ', '.join(register.keys())
            ) from None
    return get


def constructer(register: Dict[str, Callable],
                kind: str,
                ) -> Callable[[Union[str, Callable]], Callable]:
    '''Create a function that retrieves by name or passes callables through.'''
    get = getter(register, kind)

    def construct(func_def: Union[str, Callable]) -> Callable:
        return func_def if callable(func_def) else get(func_def)

    return construct


def register_functions(register: Dict[str, Callable],
                       kind: str,
                       ) -> Tuple[Callable, Callable, Callable]:
    '''Construct the marker, getter and constructer functions at one call.'''
    return (
        marker(register),
        getter(register, kind),
        constructer(register, kind),
    )
