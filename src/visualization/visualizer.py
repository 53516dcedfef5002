import plotly.express as px


def format_hour_label(hour):
    """
    "00" -> "12 AM", "13" -> "1 PM".
    """
    h = int(hour)
    if h == 0:
        return "12 AM"
    if h == 12:
        return "12 PM"
    return f"{h - 12} PM" if h > 12 else f"{h} AM"


def shorten_label(name, length=12):
    return name[:length] + '...' if len(name) > length else name


class Visualizer:
    """
    Handles generation of interactive Plotly charts for the watch history views.
    """

    # Theme Configuration
    THEME_COLORS = {
        'background': '#0e1117', # Streamlit dark default
        'paper': '#0e1117',
        'text': '#fafafa',
        'grid': '#333333',
    }

    CHANNEL_COLORS = ['#0088FE', '#00C49F', '#FFBB28', '#FF8042', '#8884d8',
                      '#82ca9d', '#ffc658', '#8dd1e1', '#a4de6c', '#d0ed57']
    LINE_COLOR = '#8884d8'
    RECURRING_COLOR = '#82ca9d'

    PLOT_HEIGHT = 400

    def __init__(self, views):
        self.views = views

    def _apply_theme(self, fig, **layout):
        fig.update_layout(
            paper_bgcolor=self.THEME_COLORS['paper'],
            plot_bgcolor=self.THEME_COLORS['background'],
            font_color=self.THEME_COLORS['text'],
            height=layout.pop('height', self.PLOT_HEIGHT),
            margin=layout.pop('margin', dict(t=40, l=50, r=30, b=50)),
            **layout
        )
        return fig

    def plot_channel_distribution(self):
        """
        Pie chart of the top channels by number of videos watched.
        """
        df = self.views.channels.copy()
        if df.empty:
            return None

        df['label'] = df['name'].apply(shorten_label)

        fig = px.pie(
            df,
            values='count',
            names='name',
            custom_data=['label'],
            color_discrete_sequence=self.CHANNEL_COLORS
        )

        fig.update_traces(
            texttemplate="%{customdata[0]}: %{percent:.0%}",
            hovertemplate="<b>%{label}</b><br>%{value} videos<extra></extra>"
        )

        return self._apply_theme(
            fig,
            showlegend=True,
            legend=dict(orientation="h", yanchor="top", y=-0.1, xanchor="center", x=0.5)
        )

    def plot_monthly_activity(self):
        """
        Line chart of videos watched per month.
        """
        df = self.views.monthly
        if df.empty:
            return None

        fig = px.line(
            df,
            x='month',
            y='count',
            markers=True,
            labels={'count': 'Videos Watched', 'month': 'Month'},
            color_discrete_sequence=[self.LINE_COLOR]
        )

        fig.update_traces(hovertemplate="<b>%{x}</b><br>%{y} videos<extra></extra>")

        return self._apply_theme(
            fig,
            xaxis=dict(type='category', showgrid=False, title=None),
            yaxis=dict(showgrid=True, gridcolor=self.THEME_COLORS['grid'], title='Videos Watched')
        )

    def plot_hourly_activity(self):
        """
        Bar chart of videos watched per hour of day. Hours without views are left out.
        """
        df = self.views.hourly
        df = df[df['count'] > 0].copy()
        if df.empty:
            return None

        df['label'] = df['hour'].apply(format_hour_label)

        fig = px.bar(
            df,
            x='label',
            y='count',
            labels={'count': 'Videos Watched', 'label': 'Hour of Day'},
            color_discrete_sequence=[self.LINE_COLOR]
        )

        fig.update_traces(
            marker_line_width=0,
            hovertemplate="<b>%{x}</b><br>%{y} videos<extra></extra>"
        )

        return self._apply_theme(
            fig,
            xaxis=dict(type='category', showgrid=False, title='Hour'),
            yaxis=dict(showgrid=True, gridcolor=self.THEME_COLORS['grid'], title='Videos Watched')
        )

    def plot_recurring_content(self):
        """
        Horizontal bar chart of videos watched more than once; hover shows the full title.
        """
        df = self.views.recurring
        if df.empty:
            return None

        fig = px.bar(
            df,
            x='count',
            y='full_title',
            orientation='h',
            custom_data=['full_title'],
            labels={'count': 'View Count', 'full_title': ''},
            color_discrete_sequence=[self.RECURRING_COLOR]
        )

        fig.update_traces(
            marker_line_width=0,
            hovertemplate="<b>%{customdata[0]}</b><br>%{x} views<extra></extra>"
        )

        return self._apply_theme(
            fig,
            height=max(200, len(df) * 40),
            margin=dict(t=20, l=130, r=30, b=40),
            # One bar per full title; truncated titles may collide, so they are only tick labels
            yaxis=dict(
                autorange='reversed',
                tickfont=dict(size=11),
                tickmode='array',
                tickvals=list(df['full_title']),
                ticktext=list(df['title'])
            ),
            xaxis=dict(showgrid=True, gridcolor=self.THEME_COLORS['grid'], title='View Count')
        )

    def figures(self):
        """
        All four charts keyed by name; charts without data map to None.
        """
        return {
            'channels': self.plot_channel_distribution(),
            'monthly': self.plot_monthly_activity(),
            'hourly': self.plot_hourly_activity(),
            'recurring': self.plot_recurring_content(),
        }
