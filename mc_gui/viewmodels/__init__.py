"""ViewModels exposing Qt signals for views."""

from mc_gui.viewmodels.select_vms_vm import SelectVMsQtViewModel

__all__ = ["SelectVMsQtViewModel"]
