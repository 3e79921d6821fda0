"""Controllers package for the timebar application.

Main Components:
    TimebarController: Routes Qt view gestures and zoom buttons to a
        TimebarManager and re-emits its notifications as Qt signals

Usage:
    from controllers import TimebarController

    controller = TimebarController(manager, timebar_widget, zoom_controls)
    controller.moved.connect(on_moved)
    controller.refresh()
"""

from controllers.timebar_controller import TimebarController

__all__ = ['TimebarController']
