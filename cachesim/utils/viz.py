import plotly.express as px
import pandas as pd

def export_sweep_chart(rows, path: str):
    if not rows:
        with open(path, "w") as f:
            f.write("<h1>Hit Rate Sweep</h1><p>No data to display.</p>")
        return

    df = pd.DataFrame(rows)
    # Rates are None for an empty trace; plot them as gaps
    df['hit_rate'] = pd.to_numeric(df['hit_rate'], errors='coerce')
    df = df.sort_values(['policy', 'associativity'])

    hover_data_cols = ['organization', 'num_sets', 'hits', 'misses', 'evictions']
    existing_hover_cols = [c for c in hover_data_cols if c in df.columns]

    fig = px.line(
        df,
        x="associativity",
        y="hit_rate",
        color="policy",
        markers=True,
        hover_data=existing_hover_cols,
        log_x=True,
        title="Hit Rate vs. Associativity",
        labels={"associativity": "Associativity (ways)", "hit_rate": "Hit Rate", "policy": "Policy"}
    )

    fig.update_yaxes(tickformat=".0%", range=[0, 1])
    fig.update_xaxes(tickvals=sorted(df['associativity'].unique()))
    fig.update_layout(
        font=dict(family="Courier New, monospace", size=12),
        legend_title="Replacement Policy"
    )

    fig.write_html(path, include_plotlyjs="cdn", full_html=True)

def export_sweep_ascii(rows, width: int = 60):
    if not rows:
        return "Sweep is empty."

    chart = "Hit Rate by Associativity (ASCII Bar Chart)\n"
    chart += ("-" * (width + 30)) + "\n"

    for row in sorted(rows, key=lambda r: (r['associativity'], str(r['policy']))):
        label = f"{row['associativity']:>6}-way {str(row['policy']):<8}"
        rate = row.get('hit_rate')
        if rate is None:
            chart += f"{label} |{' ' * width}| n/a\n"
            continue
        filled = int(round(rate * width))
        chart += f"{label} |{'#' * filled}{'-' * (width - filled)}| {rate:.2%}\n"

    chart += ("-" * (width + 30)) + "\n"
    return chart
