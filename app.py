import logging
from dataclasses import fields
from functools import partial
import streamlit as st
from pvsim.config import (get_settings, DEFAULT_INPUTS, CURRENCY, REPORT_TITLE,
                          DEDUCTION_YEARS_MIN, DEDUCTION_YEARS_MAX)
from pvsim.utils import SimulationInputs
from pvsim.service import calculate
from pvsim.presenter import ScenarioPresenter, Message
from pvsim.export import format_currency
from pvsim.table import to_frame

settings = get_settings()
logging.basicConfig(level=settings.log_level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

st.set_page_config(page_title='Simulador Solar Fotovoltaico', layout='wide')

SUMMARY_LABELS = {
    'ingreso_total_anual': 'Ingreso por generación año 1',
    'autoconsumo_anual': 'Autoconsumo',
    'excedente1_anual': 'Excedente 1',
    'excedente2_anual': 'Excedente 2',
}
BENEFIT_LABELS = {
    'beneficio_depreciacion_anio1': 'Depreciación acelerada año 1',
    'beneficio_renta_anio1': 'Deducción renta año 1',
    'beneficio_total_anio1': 'Total beneficios tributarios año 1',
}

def service_url():
    try:
        return st.secrets.get('PVSIM_SERVICE_URL', settings.service_url)
    except Exception:
        # no secrets.toml
        return settings.service_url

def field_label(name: str) -> str:
    return name.replace('_', ' ').replace('anios', 'años')

def show(msg: Message):
    if msg is None:
        return
    getattr(st, msg.level, st.info)(msg.text)

def get_presenter() -> ScenarioPresenter:
    if 'presenter' not in st.session_state:
        st.session_state.presenter = ScenarioPresenter()
    return st.session_state.presenter

presenter = get_presenter()

st.markdown("<h1 style='text-align:center'>🌞 Simulador Solar Fotovoltaico</h1>", unsafe_allow_html=True)
st.header(REPORT_TITLE)

# --- Inputs ---
with st.form('simulador'):
    values = {}
    cols = st.columns(3)
    for i, f in enumerate(fields(SimulationInputs)):
        default = getattr(DEFAULT_INPUTS, f.name)
        with cols[i % 3]:
            if f.name == 'anios_deduccion_renta':
                values[f.name] = st.number_input(field_label(f.name), DEDUCTION_YEARS_MIN, DEDUCTION_YEARS_MAX, int(default), step=1)
            elif f.type is int:
                values[f.name] = st.number_input(field_label(f.name), min_value=1, value=int(default), step=1)
            else:
                values[f.name] = st.number_input(field_label(f.name), value=float(default), format='%g')
    submitted = st.form_submit_button('Calcular Flujo', use_container_width=True)

if submitted:
    previous = presenter.bundle
    with st.spinner('Calculando flujo de caja...'):
        msg = presenter.submit(SimulationInputs(**values), calculate=partial(calculate, url=service_url(), timeout=settings.timeout))
    if presenter.bundle is not previous:
        # a new bundle always starts on the base scenario
        st.session_state.with_benefits = False
        st.session_state.with_leasing = False
    show(msg)

if presenter.bundle is None:
    st.info('Ingrese los parámetros del proyecto y presione "Calcular Flujo".')
    st.stop()

# --- Scenario selection ---
c1, c2 = st.columns(2)
with_benefits = c1.checkbox('Ver resultados con beneficios tributarios', key='with_benefits')
with_leasing = c2.checkbox('Ver resultados con leasing', key='with_leasing')

chart_area = st.container()
presenter.renderer.mount(chart_area.empty())
show(presenter.update_selection(with_benefits, with_leasing))

view = presenter.view
if view is None:
    st.stop()

# --- Indicators ---
with st.container(border=True):
    st.subheader('📊 Resultado Financiero')
    ind = view.indicators
    m1, m2, m3 = st.columns(3)
    m1.metric('VPN', f"{format_currency(ind.net_present_value)} {CURRENCY}")
    m2.metric('TIR', f"{ind.internal_rate_of_return:.2f} %" if ind.internal_rate_of_return is not None else 'n/a')
    m3.metric('Payback', f"Año {ind.payback_year:g}" if ind.payback_year is not None else 'No recupera')
    st.caption(view.label)

    summary = presenter.bundle.summary
    shown = {k: v for k, v in SUMMARY_LABELS.items() if k in summary}
    if shown:
        st.divider()
        for key, label in shown.items():
            st.markdown(f"**{label}:** {format_currency(summary[key])} {CURRENCY}")
    if presenter.selection.with_benefits:
        benefits = {k: v for k, v in BENEFIT_LABELS.items() if k in summary}
        if benefits:
            st.divider()
            for key, label in benefits.items():
                st.markdown(f"**{label}:** {format_currency(summary[key])} {CURRENCY}")

# --- Table ---
st.subheader('Flujo de caja por año')
st.dataframe(to_frame(view.rows), use_container_width=True, hide_index=True)

# --- Export ---
with st.expander('Descargar resultados'):
    csv_text, msg = presenter.export_csv()
    show(msg)
    st.download_button('Tabla CSV', (csv_text or '').encode('utf-8'), f'flujo_{view.scenario}.csv', 'text/csv',
                       disabled=csv_text is None)
    if st.button('Generar PDF', disabled=not view.rows):
        with st.spinner('Generando PDF...'):
            pdf_bytes, msg = presenter.export_pdf()
        show(msg)
        if pdf_bytes:
            st.download_button('Reporte PDF', pdf_bytes, f'reporte_{view.scenario}.pdf', 'application/pdf')
