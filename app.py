import argparse
import logging
import sys

import gradio as gr

from api import create_app
from dash_board import DASHBOARD_TXT, FOOTER_TXT, HEADER_TXT
from llm_config import DATA_DIR, LOG_LEVEL
from logic.logic_chat import chat_lock_action, chat_send_action
from logic.logic_form import (
    add_favorite_action,
    cancel_save_action,
    confirm_save_action,
    delete_profile_action,
    equipment_change_action,
    init_form_action,
    load_profile_action,
    mode_change_action,
    new_profile_action,
    next_step_action,
    previous_step_action,
    remove_favorites_action,
    technique_change_action,
    update_profile_action,
)
from logic.logic_history import (
    clear_history_action,
    delete_history_action,
    load_history_action,
    refresh_history_action,
    rename_history_action,
    select_history_action,
)
from logic.logic_plan import (
    clear_plan_action,
    export_plan_action,
    generate_plan_action,
    init_plan_action,
)
from storage import default_storage
from stores import app_stores
from workout_types import (
    EQUIPMENT_OPTIONS,
    FITNESS_LEVELS,
    GENDERS,
    PREFERENCE_MODES,
    TECHNIQUE_OPTIONS,
    WORKOUT_GOALS,
)

logger = logging.getLogger(__name__)


def switch_view(view: str, chat_open: bool = False):
    """Visibility updates for plan view, chat column and history column."""
    return (
        {"view": view, "chat_open": chat_open},
        gr.update(visible=(view == "plan")),
        gr.update(visible=(view == "plan" and chat_open)),
        gr.update(visible=(view == "history")),
        gr.update(value="✖ Close chat" if chat_open else "💬 Modify", visible=(view == "plan")),
    )


def toggle_history_view(view_state):
    view = "plan" if view_state.get("view") == "history" else "history"
    return switch_view(view)


def toggle_chat(view_state):
    return switch_view("plan", not view_state.get("chat_open"))


with gr.Blocks(title="Workout Coach") as demo:
    # Global states
    wizard_state = gr.State({})
    plan_state = gr.State(None)
    plan_time_state = gr.State(None)  # when plan_state became the current plan
    chat_history_state = gr.State([])  # [{"role", "content"}]
    view_state = gr.State({"view": "plan", "chat_open": False})

    gr.Markdown(HEADER_TXT)
    error_box = gr.Markdown("", visible=False)

    # ========== Form wizard ==========
    with gr.Column(visible=True) as form_panel:
        with gr.Accordion("Saved profiles", open=False):
            with gr.Row():
                profile_dropdown = gr.Dropdown(label="Saved profiles", choices=[], scale=3)
                load_profile_btn = gr.Button("Load")
                new_profile_btn = gr.Button("New profile")
                update_profile_btn = gr.Button("Update current")
                delete_profile_btn = gr.Button("Delete", variant="stop")
        profile_status = gr.Markdown("")

        step_indicator = gr.Markdown("")
        form_errors = gr.Markdown("", visible=False)

        with gr.Column(visible=True) as step1:
            gender = gr.Radio(label="Gender", choices=[(label, v) for v, label in GENDERS])
            with gr.Row():
                age = gr.Number(label="Age", minimum=13, maximum=100, precision=0)
                height = gr.Number(label="Height (cm)", minimum=100, maximum=250, precision=0)
                weight = gr.Number(label="Weight (kg)", minimum=30, maximum=300, precision=0)

        with gr.Column(visible=False) as step2:
            fitness_level = gr.Radio(
                label="Fitness Level",
                choices=[(f"{label}: {desc}", v) for v, label, desc in FITNESS_LEVELS],
            )
            with gr.Row():
                goal = gr.Dropdown(
                    label="Primary Goal", choices=[(label, v) for v, label in WORKOUT_GOALS]
                )
                secondary_goal = gr.Dropdown(
                    label="Secondary Goal (Optional)",
                    choices=[("None", "")] + [(label, v) for v, label in WORKOUT_GOALS],
                    value="",
                )
            equipment = gr.CheckboxGroup(
                label="Available Equipment (Select all that apply)",
                choices=[(f"{label} ({desc})", v) for v, label, desc in EQUIPMENT_OPTIONS],
            )
            limitations = gr.Textbox(
                label="Physical Limitations or Injuries (Optional)",
                placeholder="e.g., Lower back pain, knee injury",
                lines=2,
            )

        with gr.Column(visible=False) as step3:
            mode = gr.Radio(
                label="How would you like to plan your workouts?",
                choices=[(label, v) for v, label in PREFERENCE_MODES],
            )
            with gr.Row():
                sessions_per_week = gr.Number(label="Sessions Per Week", minimum=1, maximum=7, precision=0)
                time_per_session = gr.Number(
                    label="Maximum Duration Per Session (minutes)",
                    minimum=15,
                    maximum=180,
                    step=15,
                    precision=0,
                )
                total_hours = gr.Number(
                    label="Total Hours Per Week", minimum=0.5, maximum=20, step=0.5, visible=False
                )

        with gr.Column(visible=False) as step4:
            with gr.Row():
                favorite_input = gr.Textbox(
                    label="Favorite Exercises (Optional)",
                    placeholder="e.g., Bench press",
                    scale=3,
                )
                add_favorite_btn = gr.Button("Add")
            with gr.Row():
                favorites = gr.CheckboxGroup(label="Your favorites (tick to remove)", choices=[], scale=3)
                remove_favorites_btn = gr.Button("Remove selected")
            techniques = gr.CheckboxGroup(
                label="Training Techniques (Optional)",
                choices=[(f"{label}: {desc}", v) for v, label, desc in TECHNIQUE_OPTIONS],
            )

        with gr.Column(visible=False) as step5:
            gr.Markdown("⏳ Analyzing your profile and designing your workout structure...")

        with gr.Column(visible=False) as save_dialog:
            gr.Markdown("### Save your profile\nGive this profile a name so you can reuse it later.")
            save_name = gr.Textbox(label="Profile name")
            save_error = gr.Markdown("", visible=False)
            with gr.Row():
                save_btn = gr.Button("Save & Generate", variant="primary")
                cancel_save_btn = gr.Button("Cancel")

        with gr.Row(visible=True) as nav_row:
            prev_btn = gr.Button("Previous", visible=False)
            next_btn = gr.Button("Next", variant="primary")

        with gr.Accordion("About", open=False):
            gr.Markdown(DASHBOARD_TXT)

    # ========== Plan ==========
    with gr.Column(visible=False) as plan_panel:
        with gr.Row():
            plan_timestamp = gr.Markdown("")
            history_btn = gr.Button("🕓 History")
            chat_toggle_btn = gr.Button("💬 Modify")

        with gr.Row():
            with gr.Column(scale=3, visible=True) as plan_view:
                plan_markdown = gr.Markdown("")
                with gr.Row():
                    export_json_btn = gr.Button("Export JSON")
                    export_csv_btn = gr.Button("Export CSV")
                    export_txt_btn = gr.Button("Export TXT")
                export_file = gr.File(label="Download", visible=False)

            with gr.Column(scale=2, visible=False) as chat_column:
                gr.Markdown("### 💬 Modify Your Plan\nChat with AI to adjust your workout")
                chatbot = gr.Chatbot(label="Plan chat", type="messages", height=480)
                chat_input = gr.Textbox(label="Your message", placeholder="Ask me to modify your workout...")
                chat_send_btn = gr.Button("Send", variant="primary")

            with gr.Column(visible=False) as history_column:
                gr.Markdown("### 🕓 Workout History")
                history_status = gr.Markdown("")
                history_dropdown = gr.Dropdown(label="Saved workouts", choices=[])
                with gr.Row():
                    load_history_btn = gr.Button("Load", variant="primary")
                    delete_history_btn = gr.Button("Delete", variant="stop")
                    clear_history_btn = gr.Button("Clear all", variant="stop")
                with gr.Row():
                    rename_box = gr.Textbox(label="Name", scale=3)
                    rename_history_btn = gr.Button("Rename")

        new_plan_btn = gr.Button("Generate New Plan", variant="primary")

    gr.Markdown(FOOTER_TXT)

    # ====== Component groups ======
    scalar_inputs = [
        gender,
        age,
        height,
        weight,
        fitness_level,
        goal,
        secondary_goal,
        limitations,
        mode,
        sessions_per_week,
        time_per_session,
        total_hours,
    ]
    wizard_outputs = [
        step_indicator,
        step1,
        step2,
        step3,
        step4,
        step5,
        nav_row,
        prev_btn,
        next_btn,
        save_dialog,
        form_errors,
    ]
    profile_fields = [
        gender,
        age,
        height,
        weight,
        fitness_level,
        goal,
        secondary_goal,
        equipment,
        limitations,
        mode,
        sessions_per_week,
        time_per_session,
        total_hours,
        favorites,
        techniques,
    ]
    form_outputs = [wizard_state] + wizard_outputs + profile_fields + [profile_dropdown, profile_status]
    plan_outputs = [form_panel, plan_panel, plan_markdown, plan_timestamp, error_box]
    view_outputs = [view_state, plan_view, chat_column, history_column, chat_toggle_btn]

    def sync_chatbot(history):
        return history

    # ====== Event bindings ======

    demo.load(init_form_action, inputs=None, outputs=form_outputs)
    demo.load(
        init_plan_action,
        inputs=None,
        outputs=[plan_state, plan_time_state, chat_history_state] + plan_outputs,
    ).then(sync_chatbot, inputs=[chat_history_state], outputs=[chatbot])

    # Wizard navigation
    next_btn.click(
        next_step_action,
        inputs=[wizard_state] + scalar_inputs,
        outputs=[wizard_state] + wizard_outputs,
    ).then(
        generate_plan_action,
        inputs=[wizard_state],
        outputs=[wizard_state, plan_state, plan_time_state, chat_history_state] + plan_outputs + wizard_outputs,
    ).then(sync_chatbot, inputs=[chat_history_state], outputs=[chatbot])

    prev_btn.click(
        previous_step_action,
        inputs=[wizard_state] + scalar_inputs,
        outputs=[wizard_state] + wizard_outputs,
    )

    # Save dialog
    save_btn.click(
        confirm_save_action,
        inputs=[wizard_state, save_name],
        outputs=[wizard_state] + wizard_outputs + [save_error, profile_dropdown, profile_status],
    ).then(
        generate_plan_action,
        inputs=[wizard_state],
        outputs=[wizard_state, plan_state, plan_time_state, chat_history_state] + plan_outputs + wizard_outputs,
    ).then(sync_chatbot, inputs=[chat_history_state], outputs=[chatbot])

    cancel_save_btn.click(
        cancel_save_action,
        inputs=[wizard_state],
        outputs=[wizard_state] + wizard_outputs + [save_error],
    )

    # Field rules
    equipment.input(
        equipment_change_action,
        inputs=[equipment, wizard_state],
        outputs=[wizard_state, equipment],
    )
    techniques.input(technique_change_action, inputs=[techniques, wizard_state], outputs=[wizard_state])
    mode.change(mode_change_action, inputs=[mode], outputs=[sessions_per_week, time_per_session, total_hours])

    add_favorite_btn.click(
        add_favorite_action,
        inputs=[favorite_input, wizard_state],
        outputs=[wizard_state, favorites, favorite_input],
    )
    favorite_input.submit(
        add_favorite_action,
        inputs=[favorite_input, wizard_state],
        outputs=[wizard_state, favorites, favorite_input],
    )
    remove_favorites_btn.click(
        remove_favorites_action,
        inputs=[favorites, wizard_state],
        outputs=[wizard_state, favorites],
    )

    # Profile menu
    load_profile_btn.click(load_profile_action, inputs=[wizard_state, profile_dropdown], outputs=form_outputs)
    new_profile_btn.click(new_profile_action, inputs=[wizard_state], outputs=form_outputs)
    delete_profile_btn.click(delete_profile_action, inputs=[wizard_state, profile_dropdown], outputs=form_outputs)
    update_profile_btn.click(
        update_profile_action,
        inputs=[wizard_state] + scalar_inputs,
        outputs=[wizard_state, profile_status],
    )

    # Plan view
    history_btn.click(toggle_history_view, inputs=[view_state], outputs=view_outputs).then(
        refresh_history_action, inputs=None, outputs=[history_dropdown, history_status]
    )
    chat_toggle_btn.click(toggle_chat, inputs=[view_state], outputs=view_outputs)

    new_plan_btn.click(
        clear_plan_action,
        inputs=None,
        outputs=[plan_state, plan_time_state, chat_history_state] + plan_outputs,
    ).then(sync_chatbot, inputs=[chat_history_state], outputs=[chatbot]).then(
        lambda: switch_view("plan"), inputs=None, outputs=view_outputs
    )

    export_json_btn.click(lambda p: export_plan_action(p, "json"), inputs=[plan_state], outputs=[export_file])
    export_csv_btn.click(lambda p: export_plan_action(p, "csv"), inputs=[plan_state], outputs=[export_file])
    export_txt_btn.click(lambda p: export_plan_action(p, "txt"), inputs=[plan_state], outputs=[export_file])

    # Chat
    chat_send_btn.click(chat_lock_action, inputs=None, outputs=[chat_input, chat_send_btn]).then(
        chat_send_action,
        inputs=[chat_input, chat_history_state, plan_state, plan_time_state],
        outputs=[chat_history_state, plan_state, plan_time_state, chatbot, chat_input, chat_send_btn] + plan_outputs,
    )
    chat_input.submit(chat_lock_action, inputs=None, outputs=[chat_input, chat_send_btn]).then(
        chat_send_action,
        inputs=[chat_input, chat_history_state, plan_state, plan_time_state],
        outputs=[chat_history_state, plan_state, plan_time_state, chatbot, chat_input, chat_send_btn] + plan_outputs,
    )

    # History
    history_dropdown.change(select_history_action, inputs=[history_dropdown], outputs=[rename_box])
    load_history_btn.click(
        load_history_action,
        inputs=[history_dropdown, plan_state, plan_time_state, chat_history_state],
        outputs=[plan_state, plan_time_state, chat_history_state] + plan_outputs + [history_status],
    ).then(sync_chatbot, inputs=[chat_history_state], outputs=[chatbot]).then(
        lambda: switch_view("plan"), inputs=None, outputs=view_outputs
    )
    rename_history_btn.click(
        rename_history_action,
        inputs=[history_dropdown, rename_box],
        outputs=[history_dropdown, history_status],
    )
    delete_history_btn.click(
        delete_history_action,
        inputs=[history_dropdown],
        outputs=[history_dropdown, history_status],
    )
    clear_history_btn.click(clear_history_action, inputs=None, outputs=[history_dropdown, history_status])


def main(argv=None) -> None:
    import uvicorn

    parser = argparse.ArgumentParser(description="Workout Coach")
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=7860)
    parser.add_argument("--data-dir", type=str, default=DATA_DIR)
    parser.add_argument("--log-level", type=str, default=LOG_LEVEL)
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app_stores.use_storage(default_storage(args.data_dir))
    logger.info("Using local storage at %s", app_stores.storage.path)

    uvicorn.run(create_app(demo), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
