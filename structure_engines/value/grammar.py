VALUE_GRAMMAR = r"""
?start: expr

?expr: sum

?sum: product
    | sum "+" product -> add
    | sum "-" product -> sub

?product: unary
        | product "*" unary -> mul
        | product "/" unary -> div
        | product "%" unary -> mod

?unary: power
      | "-" unary -> neg
      | "+" unary

?power: atom
      | atom "^" unary -> pow

?atom: NUMBER -> number
     | NAME "(" [arguments] ")" -> call
     | NAME -> var
     | "(" expr ")"

arguments: expr ("," expr)*

NAME: /[A-Za-z_][A-Za-z0-9_]*/

%import common.NUMBER
%import common.WS
%ignore WS
"""
