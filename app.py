import gradio as gr

from json_field_reader.handlers import (
    TABLE_HEADERS,
    example_inputs,
    export_report_handler,
    load_document_handler,
    populate_handler,
    suggest_handler,
    update_field_table,
)

example_document, example_fields = example_inputs()

# --- UI Definition ---
with gr.Blocks(title="JSON Field Reader") as demo:
    gr.Markdown("# JSON Field Reader")
    gr.Markdown("Paste or upload a JSON document, register fields by query expression, and read them as numbers.")

    with gr.Row():
        # Left Panel: Document & Expressions
        with gr.Column(scale=1):
            gr.Markdown("### 1. Document")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            document_box = gr.Textbox(label="JSON Document", value=example_document, lines=12)
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Pick Values")
            suggest_btn = gr.Button("List Query Expressions")
            expression_selector = gr.Dropdown(
                label="Query Expressions",
                choices=[],
                value=[],
                multiselect=True,
                interactive=True,
            )

        # Right Panel: Fields & Report
        with gr.Column(scale=1):
            gr.Markdown("### 3. Fields")
            gr.Markdown("Rename fields or edit expressions, e.g. `.STATS.[1].GHS 5s`.")
            field_table = gr.Dataframe(
                headers=TABLE_HEADERS,
                datatype=["str", "str"],
                col_count=(2, "fixed"),
                value=example_fields,
                interactive=True,
                label="Field Registrations",
            )
            policy = gr.Radio(
                choices=["empty", "tag"],
                value="empty",
                label="On query error",
                info="empty: report <empty string>; tag: report <query error>",
            )

            gr.Markdown("### 4. Read & Export")
            read_btn = gr.Button("Read Fields", variant="primary")
            report_box = gr.Textbox(label="Report", lines=8, interactive=False)
            report_preview = gr.JSON(label="Readings")
            output_format = gr.Radio(choices=["CSV", "JSON"], value="CSV", label="Output Format")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="readings")
            export_btn = gr.Button("Export Readings")
            download_output = gr.File(label="Download Result")

    file_input.upload(
        fn=load_document_handler,
        inputs=[file_input],
        outputs=[document_box, expression_selector, status_msg],
    )

    suggest_btn.click(
        fn=suggest_handler,
        inputs=[document_box],
        outputs=[expression_selector, status_msg],
    )

    expression_selector.change(
        fn=update_field_table,
        inputs=[expression_selector],
        outputs=[field_table],
    )

    read_btn.click(
        fn=populate_handler,
        inputs=[document_box, field_table, policy],
        outputs=[report_box, report_preview, status_msg],
    )

    export_btn.click(
        fn=export_report_handler,
        inputs=[document_box, field_table, policy, output_format, output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
