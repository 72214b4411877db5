import streamlit as st
from datetime import datetime
from typing import Optional

from data import ImportFailure, backup_filename, export_state, import_state
from models import AppState

def backup_section(state: AppState, now: datetime) -> Optional[AppState]:
    st.download_button(
        "⬇️ Export backup", data=export_state(state),
        file_name=backup_filename(now), mime="application/json",
    )

    file = st.file_uploader("Restore from backup", type=["json"])
    if not file:
        return None
    try:
        restored = import_state(file.getvalue().decode("utf-8"))
    except (ImportFailure, UnicodeDecodeError):
        st.error("The file is invalid or corrupted.")
        return None

    st.warning("Restoring replaces ALL current data with the backup.")
    if st.checkbox("I understand, overwrite my data") and st.button("Restore", type="primary"):
        st.success("Data restored.")
        return restored
    return None
