"""
bundlepack - Upload bundles for artifacts in a local repository.

Packs an artifact that is already installed in a local Maven-layout
repository, together with its descriptor and companion files, into one
archive ready for an upload request. Missing mandatory descriptor fields
(packaging, name, description, url, license) are asked for and written
back to the descriptor first.

Example usage:
    from bundlepack import BundlePackPipeline, ConsolePrompter, LocalRepositoryResolver

    pipeline = BundlePackPipeline(
        resolver=LocalRepositoryResolver("/home/me/.m2/repository"),
        prompter=ConsolePrompter(batch_mode=True),
        output_dir="dist",
    )
    result = pipeline.run(group_id="com.example", artifact_id="lib", version="1.0")
    print(result.bundle_path)  # dist/lib-1.0-bundle.jar
"""

__version__ = "0.1.0"
__all__ = [
    "BundlePackPipeline",
    "ConsolePrompter",
    "ScriptedPrompter",
    "LocalRepositoryResolver",
    "__version__",
]


# Lazy imports to avoid loading click/pydantic at import time
def __getattr__(name: str):
    if name == "BundlePackPipeline":
        from bundlepack.pipeline import BundlePackPipeline
        return BundlePackPipeline
    if name == "ConsolePrompter":
        from bundlepack.prompt import ConsolePrompter
        return ConsolePrompter
    if name == "ScriptedPrompter":
        from bundlepack.prompt import ScriptedPrompter
        return ScriptedPrompter
    if name == "LocalRepositoryResolver":
        from bundlepack.resolver import LocalRepositoryResolver
        return LocalRepositoryResolver
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
