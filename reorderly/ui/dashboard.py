# reorderly/ui/dashboard.py
# streamlit run reorderly/ui/dashboard.py
import streamlit as st

from reorderly.etl.feature_builder import products_to_frame
from reorderly.models.session import ReorderSession
from reorderly.utils.config import export_path
from reorderly.utils.exceptions import ReorderlyException

st.set_page_config(page_title='Reorderly', layout='wide')

if 'session' not in st.session_state:
    st.session_state['session'] = ReorderSession()
session: ReorderSession = st.session_state['session']

st.title('Reorderly - Inventory Reorder Predictor')
st.caption('Mock products → business rule → neural network → predictions')

# ---------------------------------------------------------
# ACTIONS
# ---------------------------------------------------------
b1, b2, b3 = st.columns(3)
with b1:
    if st.button('Regenerate Products', disabled=session.is_training):
        try:
            session.regenerate()
        except ReorderlyException as e:
            st.error(e.message)
with b2:
    label = 'Training...' if session.is_training else 'Train Model & Predict'
    if st.button(label, disabled=not session.can_train):
        with st.spinner('Training model...'):
            result = session.train_and_predict()
        if result.success:
            st.success(f'Model trained in {result.duration_seconds:.1f}s')
        else:
            st.error(result.error)
with b3:
    try:
        st.download_button('Download CSV', data=session.to_csv(),
                           file_name=export_path().name, mime='text/csv')
    except ReorderlyException as e:
        st.caption(e.message)

# ---------------------------------------------------------
# STATS
# ---------------------------------------------------------
stats = session.stats()
c1, c2, c3, c4 = st.columns(4)
c1.metric('Products', stats['total'])
c2.metric('Server Reorders (rule)', stats['server_reorders'])
c3.metric('Model Predicted Reorders', stats['model_reorders'])
c4.metric('Model Val Accuracy', stats['model_accuracy'])

st.divider()

# ---------------------------------------------------------
# TABLE
# ---------------------------------------------------------
st.subheader('Products Table')
st.caption(f'{len(session.products)} items')
df = products_to_frame(session.products)
df['prediction_text'] = [p.prediction_text or '-' for p in session.products]
df = df.drop(columns=['prediction']).rename(columns={
    'current_inventory': 'Inventory',
    'avg_sales_per_week': 'Avg sales / wk',
    'days_to_replenish': 'Days to replenish',
    'reorder': 'Rule label',
    'prediction_text': 'Prediction',
    'prediction_score': 'Score',
})
st.dataframe(df.round({'Score': 3}), width='stretch', hide_index=True)
