"""
Serialization and file output for parsed screenplays.
"""
import json
from pathlib import Path

from models import ParsedScreenplay


def to_output_dict(result: ParsedScreenplay) -> dict:
    """
    Convert a parse result to its JSON-ready shape.

    Returns:
        Dict with title, scenes, metadata and warnings
    """
    return {
        "title": result.title,
        "scenes": [
            {
                "number": scene.number,
                "header": scene.header,
                "headerParsed": {
                    "intExt": scene.header_parsed.int_ext,
                    "location": scene.header_parsed.location,
                    "timeOfDay": scene.header_parsed.time_of_day,
                },
                "content": scene.content,
            }
            for scene in result.scenes
        ],
        "metadata": {
            "totalScenes": result.metadata.total_scenes,
            "format": result.metadata.format,
            "parseDate": result.metadata.parse_date,
        },
        "warnings": [
            {"code": w.code, "message": w.message, "sceneNumber": w.scene_number}
            for w in result.warnings
        ],
    }


def get_analysis_payloads(result: ParsedScreenplay) -> list[dict]:
    """
    Build one request body per scene for the scene analysis service.

    Returns:
        List of dicts with sceneText, sceneNumber and totalScenes
    """
    total = result.metadata.total_scenes
    return [
        {
            "sceneText": scene.content,
            "sceneNumber": scene.number,
            "totalScenes": total,
        }
        for scene in result.scenes
    ]


def write_json(result: ParsedScreenplay, output_dir: str, source: str) -> str:
    """
    Write the parse result as <source stem>.json.

    Returns:
        Path to the JSON file
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    output_path = Path(output_dir) / f"{Path(source).stem}.json"

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(to_output_dict(result), f, indent=2, ensure_ascii=False)

    return str(output_path)


def split_to_markdown_files(
    result: ParsedScreenplay,
    output_dir: str,
    filename_template: str = "scene_{index:03d}_{number}.md"
) -> list[str]:
    """
    Create one markdown file per scene.

    Args:
        result: ParsedScreenplay from parse_file()
        output_dir: Directory for output files
        filename_template: Template for output filenames

    Returns:
        List of created file paths
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    output_files = []

    for scene in result.scenes:
        parsed = scene.header_parsed
        lines = [
            f"# Scene {scene.number}: {scene.header}",
            "",
            f"- INT/EXT: {parsed.int_ext or 'unknown'}",
            f"- Location: {parsed.location}",
            f"- Time: {parsed.time_of_day or 'unspecified'}",
            "",
            "---",
            "",
            scene.content,
            "",
        ]

        # Duplicate scene numbers are possible, so the position keeps names unique
        filename = filename_template.format(index=scene.index + 1, number=scene.number)
        output_path = Path(output_dir) / filename

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines))

        output_files.append(str(output_path))

    return output_files


def write_summary(
    result: ParsedScreenplay,
    output_dir: str,
    source: str
) -> str:
    """
    Write a human-readable summary file.

    Returns:
        Path to summary file
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    summary_path = Path(output_dir) / "parse_summary.txt"

    lines = [
        "Screenplay Parse Summary",
        "=" * 50,
        f"Source: {source}",
        f"Title: {result.title}",
        f"Format: {result.metadata.format}",
        f"Scenes: {result.metadata.total_scenes}",
        f"Parsed at: {result.metadata.parse_date}",
        "",
    ]

    if result.warnings:
        lines.append("Warnings:")
        for w in result.warnings:
            lines.append(f"  - [{w.code}] {w.message}")
        lines.append("")

    lines.append("Scenes:")
    lines.append("-" * 50)

    for scene in result.scenes:
        heading_preview = scene.header[:60] + "..." if len(scene.header) > 60 else scene.header
        lines.append(f"  {scene.number:>4}  {heading_preview}  ({len(scene.content)} chars)")

    with open(summary_path, 'w', encoding='utf-8') as f:
        f.write('\n'.join(lines))

    return str(summary_path)
