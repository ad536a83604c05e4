import marimo

__generated_with = "0.17.6"
app = marimo.App(width="full")


@app.cell
def _():
    import marimo as mo
    import logging

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    from silhouette_finder import PipelineConfig, ScanStrategy, SilhouettePipeline
    from silhouette_finder.data_loader import load_image
    from silhouette_finder.mapping import MIN_DEVIATION_LIMIT
    from silhouette_finder.viz import plot_silhouettes
    return (
        MIN_DEVIATION_LIMIT,
        PipelineConfig,
        ScanStrategy,
        SilhouettePipeline,
        load_image,
        mo,
        plot_silhouettes,
    )


@app.cell
def _(mo):
    mo.md("""
    # Silhouettes Finder

    Counts the silhouettes of an image. The background color is the mean of the
    perimeter pixels; a pixel belongs to a silhouette when the sum of its channel
    deviations from the background reaches **min deviation**.

    - Raise **min deviation** for images with a high level of noise.
    - Raise **min size factor** to keep smaller silhouettes.
    - Raise **crop power** to split silhouettes that are slightly merged.
    """)
    return


@app.cell
def _(mo):
    path_input = mo.ui.text(value="assets/mtest5.jpg", label="Image path:", full_width=True)
    path_input
    return (path_input,)


@app.cell
def _(SilhouettePipeline, load_image, mo, path_input):
    try:
        grid = load_image(path_input.value).to_channel_grid()
    except (FileNotFoundError, ValueError) as e:
        mo.stop(True, mo.md(f"**Cannot read file** `{path_input.value}`: {e}"))

    # the background is estimated once per image; sliders only re-run the map and scan
    pipeline = SilhouettePipeline(grid)

    mo.md(f"""
    **Image**: {grid.width}x{grid.height} | **Background**: {tuple(pipeline.reference)}
    """)
    return grid, pipeline


@app.cell
def _(MIN_DEVIATION_LIMIT, ScanStrategy, mo):
    MAX_MIN_SIZE_FACTOR = 5000
    MAX_CROP_POWER = 50

    min_deviation_slider = mo.ui.slider(
        start=1, stop=MIN_DEVIATION_LIMIT, step=1, value=130,
        label="Min deviation:", show_value=True
    )

    min_size_factor_slider = mo.ui.slider(
        start=1, stop=MAX_MIN_SIZE_FACTOR, step=1, value=380,
        label="Min size factor:", show_value=True
    )

    crop_power_slider = mo.ui.slider(
        start=0, stop=MAX_CROP_POWER, step=1, value=5,
        label="Crop power:", show_value=True
    )

    strategy_selector = mo.ui.dropdown(
        options={
            'Breadth-first': ScanStrategy.BREADTH_FIRST,
            'Depth-first': ScanStrategy.DEPTH_FIRST
        },
        value='Breadth-first',
        label="Scan strategy:",
    )

    draw_original_checkbox = mo.ui.checkbox(value=True, label="Draw original image")
    draw_map_checkbox = mo.ui.checkbox(value=False, label="Draw map")
    draw_silhouettes_checkbox = mo.ui.checkbox(value=True, label="Draw silhouettes")

    mo.vstack([
        draw_original_checkbox,
        draw_map_checkbox,
        draw_silhouettes_checkbox,
        min_deviation_slider,
        min_size_factor_slider,
        crop_power_slider,
        strategy_selector,
    ])
    return (
        crop_power_slider,
        draw_map_checkbox,
        draw_original_checkbox,
        draw_silhouettes_checkbox,
        min_deviation_slider,
        min_size_factor_slider,
        strategy_selector,
    )


@app.cell
def _(
    PipelineConfig,
    crop_power_slider,
    min_deviation_slider,
    min_size_factor_slider,
    pipeline,
    strategy_selector,
):
    config = PipelineConfig(
        min_deviation=min_deviation_slider.value,
        min_size_factor=min_size_factor_slider.value,
        crop_power=crop_power_slider.value,
        strategy=strategy_selector.value
    )

    result = pipeline.run(config, with_labels=True)
    return (result,)


@app.cell
def _(
    draw_map_checkbox,
    draw_original_checkbox,
    draw_silhouettes_checkbox,
    grid,
    mo,
    plot_silhouettes,
    result,
):
    fig_silhouettes = plot_silhouettes(
        grid,
        result.silhouette_map,
        result.labels,
        result.count,
        draw_original=draw_original_checkbox.value,
        draw_map=draw_map_checkbox.value,
        draw_silhouettes=draw_silhouettes_checkbox.value
    )

    mo.vstack([
        mo.md(f"""
        **Silhouettes count**: {result.count} | **Min size**: {result.min_size} px |
        **Time**: {result.elapsed_time*1000:.1f}ms
        """),
        fig_silhouettes,
    ])
    return


if __name__ == "__main__":
    app.run()
