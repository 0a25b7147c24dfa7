"""Build-manifest rendering for Tuist and XcodeGen.

Each backend/layout pair is an independent pure function from
:class:`ProjectModel` to artifacts.  The four renderers share no builder
state; they only read the same model fields, which is what keeps module
names, bundle identifiers and versions consistent across backends.

    =========  ==============================  ==============================
    backend    single layout                   modular layout
    =========  ==============================  ==============================
    tuist      Project.swift + Tuist.swift     Project.swift + Tuist.swift
    xcodegen   project.yml + Info.plist        project.yml + Info.plist
    =========  ==============================  ==============================
"""

from __future__ import annotations

import plistlib
from collections.abc import Callable
from typing import Any

import yaml

from .errors import ValidationError
from .models import GeneratedArtifact, Layout, ManifestBackend, ProjectModel
from .templates import TemplateRenderer

SUPPORTED_BACKENDS: tuple[str, ...] = tuple(b.value for b in ManifestBackend)


def parse_backend(value: str | ManifestBackend) -> ManifestBackend:
    """Resolve a backend selector (case-insensitive).

    Raises:
        ValidationError: If *value* is not one of ``tuist``, ``xcodegen``,
            ``none``.
    """
    if isinstance(value, ManifestBackend):
        return value
    try:
        return ManifestBackend(value.strip().lower())
    except ValueError:
        raise ValidationError(
            f"Unknown project tool: {value}",
            value=value,
            allowed=SUPPORTED_BACKENDS,
        ) from None


def render_manifest(
    model: ProjectModel, renderer: TemplateRenderer | None = None
) -> list[GeneratedArtifact]:
    """Render the manifest selected by ``model.spec.manifest_backend``.

    Returns an empty list for the ``none`` backend.
    """
    backend = model.spec.manifest_backend
    if backend is ManifestBackend.NONE:
        return []
    render = _RENDERERS[(backend, model.layout)]
    return render(model, renderer or TemplateRenderer())


# ---------------------------------------------------------------------------
# Shared identifiers
# ---------------------------------------------------------------------------

def bundle_id(model: ProjectModel) -> str:
    """Bundle identifier of the main target."""
    return f"{model.spec.organization_id}.{model.name}"


def unit_test_bundle_id(model: ProjectModel) -> str:
    """Bundle identifier of the unit-test target."""
    return f"{bundle_id(model)}.Tests"


def _manifest_context(model: ProjectModel) -> dict[str, Any]:
    return {
        "name": model.name,
        "organization_name": model.spec.organization_name,
        "bundle_id": bundle_id(model),
        "test_bundle_id": unit_test_bundle_id(model),
        "platform_version": model.spec.platform_version,
        "tool_version": model.spec.tool_version,
        "library_modules": model.library_module_names,
    }


# ---------------------------------------------------------------------------
# Tuist
# ---------------------------------------------------------------------------

def render_tuist_single(
    model: ProjectModel, renderer: TemplateRenderer
) -> list[GeneratedArtifact]:
    """``Project.swift`` with a framework and its unit tests, plus ``Tuist.swift``."""
    ctx = _manifest_context(model)
    return [
        renderer.render_artifact("tuist/Project.single.swift.j2", "Project.swift", ctx),
        renderer.render_artifact("tuist/Tuist.swift.j2", "Tuist.swift", ctx),
    ]


def render_tuist_modular(
    model: ProjectModel, renderer: TemplateRenderer
) -> list[GeneratedArtifact]:
    """``Project.swift`` with an app over local packages, plus ``Tuist.swift``."""
    ctx = _manifest_context(model)
    return [
        renderer.render_artifact("tuist/Project.modular.swift.j2", "Project.swift", ctx),
        renderer.render_artifact("tuist/Tuist.swift.j2", "Tuist.swift", ctx),
    ]


# ---------------------------------------------------------------------------
# XcodeGen
# ---------------------------------------------------------------------------

def render_xcodegen_single(
    model: ProjectModel, renderer: TemplateRenderer
) -> list[GeneratedArtifact]:
    """``project.yml`` with a framework and its unit tests, plus ``Info.plist``."""
    name = model.name
    version = model.spec.platform_version
    project: dict[str, Any] = {
        "name": name,
        "options": {"deploymentTarget": {"iOS": version}},
        "targets": {
            name: {
                "type": "framework",
                "platform": "iOS",
                "deploymentTarget": version,
                "sources": [f"Sources/{name}"],
                "info": {"path": "Info.plist"},
                "settings": {"base": {
                    "PRODUCT_BUNDLE_IDENTIFIER": bundle_id(model),
                    "PRODUCT_NAME": name,
                }},
                "scheme": {"testTargets": [f"{name}Tests"]},
            },
            f"{name}Tests": _xcodegen_test_target(model, f"Tests/{name}Tests"),
        },
    }
    return [
        GeneratedArtifact.from_text("project.yml", _dump_yaml(project)),
        GeneratedArtifact(relative_path="Info.plist", content=info_plist(model)),
    ]


def render_xcodegen_modular(
    model: ProjectModel, renderer: TemplateRenderer
) -> list[GeneratedArtifact]:
    """``project.yml`` with an app over local packages, plus ``Info.plist``."""
    name = model.name
    version = model.spec.platform_version
    modules = model.library_module_names
    project: dict[str, Any] = {
        "name": name,
        "options": {
            "deploymentTarget": {"iOS": version},
            "xcodeVersion": model.spec.tool_version,
        },
        "packages": {m: {"path": f"./Packages/{m}"} for m in modules},
        "targets": {
            name: {
                "type": "application",
                "platform": "iOS",
                "deploymentTarget": version,
                "sources": ["Sources"],
                "resources": ["Resources"],
                "dependencies": [{"package": m} for m in modules],
                "info": {
                    "path": "Info.plist",
                    "properties": {
                        "UILaunchStoryboardName": "LaunchScreen",
                        "CFBundleDisplayName": name,
                        "CFBundleIdentifier": bundle_id(model),
                    },
                },
                "settings": {"base": {
                    "PRODUCT_BUNDLE_IDENTIFIER": bundle_id(model),
                    "PRODUCT_NAME": name,
                    "INFOPLIST_FILE": "Info.plist",
                }},
            },
            f"{name}Tests": _xcodegen_test_target(model, "Tests"),
        },
    }
    return [
        GeneratedArtifact.from_text("project.yml", _dump_yaml(project)),
        GeneratedArtifact(relative_path="Info.plist", content=info_plist(model)),
    ]


def _xcodegen_test_target(model: ProjectModel, sources: str) -> dict[str, Any]:
    return {
        "type": "bundle.unit-test",
        "platform": "iOS",
        "deploymentTarget": model.spec.platform_version,
        "sources": [sources],
        "dependencies": [{"target": model.name}],
        "settings": {"base": {
            "PRODUCT_BUNDLE_IDENTIFIER": unit_test_bundle_id(model),
            "PRODUCT_NAME": f"{model.name}Tests",
        }},
    }


def _dump_yaml(data: dict[str, Any]) -> str:
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


def info_plist(model: ProjectModel) -> bytes:
    """Property list accompanying the XcodeGen manifest.

    Application keys (launch screen, orientations) are only present for the
    modular layout, whose main target is an app.
    """
    plist: dict[str, Any] = {
        "CFBundleDevelopmentRegion": "$(DEVELOPMENT_LANGUAGE)",
        "CFBundleExecutable": "$(EXECUTABLE_NAME)",
        "CFBundleIdentifier": "$(PRODUCT_BUNDLE_IDENTIFIER)",
        "CFBundleInfoDictionaryVersion": "6.0",
        "CFBundleName": "$(PRODUCT_NAME)",
        "CFBundlePackageType": "$(PRODUCT_BUNDLE_PACKAGE_TYPE)",
        "CFBundleShortVersionString": "1.0",
        "CFBundleVersion": "1",
    }
    if model.is_modular:
        plist.update({
            "LSRequiresIPhoneOS": True,
            "UILaunchStoryboardName": "LaunchScreen",
            "UIRequiredDeviceCapabilities": ["armv7"],
            "UISupportedInterfaceOrientations": [
                "UIInterfaceOrientationPortrait",
                "UIInterfaceOrientationLandscapeLeft",
                "UIInterfaceOrientationLandscapeRight",
            ],
            "UISupportedInterfaceOrientations~ipad": [
                "UIInterfaceOrientationPortrait",
                "UIInterfaceOrientationPortraitUpsideDown",
                "UIInterfaceOrientationLandscapeLeft",
                "UIInterfaceOrientationLandscapeRight",
            ],
        })
    return plistlib.dumps(plist, sort_keys=False)


_Renderer = Callable[[ProjectModel, TemplateRenderer], list[GeneratedArtifact]]

_RENDERERS: dict[tuple[ManifestBackend, Layout], _Renderer] = {
    (ManifestBackend.TUIST, Layout.SINGLE): render_tuist_single,
    (ManifestBackend.TUIST, Layout.MODULAR): render_tuist_modular,
    (ManifestBackend.XCODEGEN, Layout.SINGLE): render_xcodegen_single,
    (ManifestBackend.XCODEGEN, Layout.MODULAR): render_xcodegen_modular,
}
