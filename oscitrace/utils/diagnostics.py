"""
OsciTrace system diagnostics and requirement checking.

Reports which optional libraries are importable and therefore which
output formats and acceleration paths can be used.
"""

import importlib
from typing import Dict, List

# import name -> (display name, what it enables)
_OPTIONAL = {
    "jax": ("JAX", "lax.scan integration path"),
    "vtk": ("VTK library", "ParaView .vtp output"),
    "h5py": ("h5py", "HDF5 output"),
    "tqdm": ("tqdm", "progress bars"),
}

_CRITICAL = ("numpy", "matplotlib", "psutil")

_INSTALL = {
    "jax": "pip install jax",
    "vtk": "pip install vtk",
    "h5py": "pip install h5py",
    "tqdm": "pip install tqdm",
    "numpy": "pip install numpy",
    "matplotlib": "pip install matplotlib",
    "psutil": "pip install psutil",
}


def _version_of(module_name: str):
    module = importlib.import_module(module_name)
    if module_name == "vtk":
        return module.vtkVersion.GetVTKVersion()
    return getattr(module, "__version__", "unknown")


def check_system_requirements(verbose: bool = True) -> Dict[str, bool]:
    """
    Check which OsciTrace dependencies are importable.

    Parameters
    ----------
    verbose : bool, default True
        Whether to print detailed status information

    Returns
    -------
    Dict[str, bool]
        Dictionary mapping requirement names to availability status
    """
    if verbose:
        print("🔍 Checking OsciTrace system requirements...")

    requirements = {'oscitrace': True}

    for name in _CRITICAL:
        try:
            version = _version_of(name)
            requirements[name] = True
            if verbose:
                print(f"   ✅ {name}: v{version}")
        except ImportError:
            requirements[name] = False
            if verbose:
                print(f"   ❌ {name}: Not available (required)")

    for name, (label, feature) in _OPTIONAL.items():
        try:
            version = _version_of(name)
            requirements[name] = True
            if verbose:
                print(f"   ✅ {label}: v{version} ({feature} enabled)")
        except ImportError:
            requirements[name] = False
            if verbose:
                print(f"   ⚠️  {label}: Not available ({feature} disabled)")

    if verbose:
        missing = [name for name in _CRITICAL if not requirements[name]]
        if missing:
            print("\n❌ Critical requirements not met!")
            for cmd in suggest_installation_commands(missing):
                print(f"   - {cmd}")
        else:
            print("✅ All critical requirements met!")

    return requirements


def suggest_installation_commands(missing_requirements: List[str]) -> List[str]:
    """
    Suggest pip install commands for missing requirements.

    Parameters
    ----------
    missing_requirements : List[str]
        List of missing requirement names

    Returns
    -------
    List[str]
        List of pip install commands
    """
    commands = []
    for req in missing_requirements:
        if req in _INSTALL and _INSTALL[req] not in commands:
            commands.append(_INSTALL[req])
    return commands
